from cs_genius.ai_core.drafting.reply_drafter import ReplyDrafter

__all__ = ["ReplyDrafter"]
