"""
Chat feature: system prompts and canned replies.
"""

CHAT_SYSTEM_PROMPT = (
    "You are VisuaRealm — an intelligent assistant. "
    "Use Markdown and fenced code blocks for any code."
)

VISION_SYSTEM_PROMPT = (
    "You are VisuaRealm — an AI that can analyze uploaded images "
    "and respond clearly in Markdown."
)

RESEARCH_SYSTEM_PROMPT = (
    "You are VisuaRealm — an intelligent, expressive assistant. "
    "Always respond in Markdown and structure clearly."
)

RESEARCH_VISION_SYSTEM_PROMPT = (
    "You are VisuaRealm — a helpful assistant that can analyze and describe "
    "uploaded images in detail. Use Markdown and stay concise."
)

VISION_INSTRUCTION = "Analyze this image and help with: {request}"
RESEARCH_VISION_INSTRUCTION = "Please analyze this image and explain it briefly."

# ── Replies shown to the user ────────────────────────────
NO_RESPONSE = "⚠️ No response generated."
NO_ANALYSIS = "⚠️ No analysis produced."
NO_MESSAGES = "⚠️ No messages provided."
INVALID_MESSAGES = "⚠️ Invalid messages payload."
UNSUPPORTED_TYPE = "⚠️ Unsupported request type."
NO_FILE = "⚠️ No file uploaded."
FILE_TOO_LARGE = "⚠️ Image too large. Try a smaller one (<{limit}MB)."
SERVER_ERROR = "⚠️ Server error. Please try again later."
RESEARCH_SERVER_ERROR = "⚠️ Server error — AI couldn’t process your message. Try again."
