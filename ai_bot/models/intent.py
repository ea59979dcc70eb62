from enum import Enum

class StrategyIntent(str, Enum):
    """Closed set of AI-backed response behaviors"""
    JOKE = "joke"
    REFUND_REJECTION = "refund_rejection"
    UPSELLING = "upselling"
    PURCHASE_MOTIVATION = "purchase_motivation"
