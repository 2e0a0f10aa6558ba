# AI Core module

"""
AI Core Module - the LLM-backed contracts.

Key responsibilities:
- Knowledge extraction from text and screenshots
- Chat audit (score, critique, improved reply, sentiment)
- Reply drafting from keywords, tone and business rules
"""
