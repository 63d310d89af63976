from commerce_hub.services.analytics_service import AnalyticsService
from commerce_hub.services.catalog_assistant import CatalogAssistant
from commerce_hub.services.chat_service import ChatService
from commerce_hub.services.conversation_recorder import ConversationRecorder
from commerce_hub.services.demand_feedback import DemandFeedbackLoop
from commerce_hub.services.intent_classifier import (
    ClassificationResult,
    ClassifierError,
    ClassifierErrorKind,
    IntentClassifier,
)
from commerce_hub.services.quote_service import QuoteService

__all__ = [
    "AnalyticsService",
    "CatalogAssistant",
    "ChatService",
    "ClassificationResult",
    "ClassifierError",
    "ClassifierErrorKind",
    "ConversationRecorder",
    "DemandFeedbackLoop",
    "IntentClassifier",
    "QuoteService",
]
