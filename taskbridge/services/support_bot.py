# taskbridge/services/support_bot.py
"""Canned replies for the support channel, picked by keyword."""

from typing import Optional, Tuple

# Checked in order; the first rule with a matching keyword answers
RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("hello", "hi", "hey"),
     "Hello! I'm the TaskBridge Support AI. How can I assist you with your missions today?"),
    (("password", "reset", "forgot"),
     "To reset your password, go to the Login page and click 'Forgot Password'. "
     "You'll receive a 6-digit code on screen to use for the reset."),
    (("task", "mission", "create"),
     "You can create a new mission from the 'My Requests' tab. "
     "Make sure to set a priority and a deadline!"),
    (("status", "progress", "track"),
     "You can track your mission progress in the 'Request History' section: "
     "Pending (0%), In Progress (50%), and Verified (100%)."),
    (("who are you", "bot", "ai"),
     "I am the TaskBridge Intelligence Unit. I can help with account access, "
     "mission creation, and platform navigation."),
    (("priority", "urgent"),
     "We offer four priority levels: Low, Medium, High, and Urgent. "
     "High priority tasks are picked up by managers first."),
)


def _matches(text: str, keyword: str) -> bool:
    # Short keywords must match whole words ("hi" should not fire on "this")
    if len(keyword) <= 3:
        return keyword in text.replace("?", " ").replace("!", " ").replace(",", " ").split()
    return keyword in text


def generate_response(message: Optional[str]) -> str:
    if message is None or not message.strip():
        return "I'm here to help! Please type your question or issue."

    text = message.lower()
    for keywords, reply in RULES:
        if any(_matches(text, keyword) for keyword in keywords):
            return reply

    return (
        f"I've logged your query about \"{message.strip()}\". While I'm looking into the specifics, "
        "you can check the 'My Requests' tab for quick actions or wait for a human manager to chime in. "
        "Ticket status: Processing."
    )
