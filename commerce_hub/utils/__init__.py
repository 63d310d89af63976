from commerce_hub.utils.json_extractor import extract_json_from_text, extract_json_safely

__all__ = ["extract_json_from_text", "extract_json_safely"]
