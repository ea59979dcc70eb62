SENSITIVE_TOPICS = ("muerte", "enfermedad", "accidente", "problema", "triste", "dolor")

def is_appropriate(context: str) -> bool:
    """Whether a conversation is light enough to joke about"""
    if not context or not context.strip():
        return False
    lowered = context.lower()
    return not any(topic in lowered for topic in SENSITIVE_TOPICS)
