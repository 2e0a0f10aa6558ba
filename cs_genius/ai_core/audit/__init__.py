from cs_genius.ai_core.audit.chat_auditor import ChatAuditor, ChatAuditError

__all__ = ["ChatAuditor", "ChatAuditError"]
