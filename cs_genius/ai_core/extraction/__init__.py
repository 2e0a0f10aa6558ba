from cs_genius.ai_core.extraction.knowledge_extractor import (
    KnowledgeExtractor,
    KnowledgeExtractionError,
)

__all__ = ["KnowledgeExtractor", "KnowledgeExtractionError"]
