from enum import Enum
from typing import Optional


class Mood(str, Enum):
    creative = "creative"
    funny = "funny"
    savage = "savage"
    sincere = "sincere"


class Complexity(str, Enum):
    basic = "basic"
    intermediate = "intermediate"
    advanced = "advanced"


EXCUSE_TEMPLATES = {
    Mood.creative: (
        'Generate a creative and imaginative excuse for this situation: "{situation}". '
        "Make it elaborate, unusual, and entertaining while keeping it believable enough. "
        "Be inventive with details and scenarios."
    ),
    Mood.funny: (
        'Generate a humorous and witty excuse for this situation: "{situation}". '
        "Make it funny, light-hearted, and amusing. "
        "Use comedy and unexpected twists to make it entertaining."
    ),
    Mood.savage: (
        'Generate a bold and confident excuse for this situation: "{situation}". '
        "Make it assertive, unapologetic, and slightly sassy. "
        "Show confidence without being too rude."
    ),
    Mood.sincere: (
        'Generate a genuine and heartfelt excuse for this situation: "{situation}". '
        "Make it honest, respectful, and apologetic. "
        "Focus on taking responsibility while explaining the circumstances."
    ),
}

NOTES_TEMPLATES = {
    Complexity.basic: (
        'Create simplified, humorous study notes about "{topic}"{subject_context}. '
        "Write in a sarcastic, witty tone like you're explaining to a lazy student who needs "
        "things dumbed down. Use casual language, bullet points, and funny analogies. "
        "Keep it entertaining but educational. Make it sound like it's written by a sassy "
        "backbencher who actually gets the material."
    ),
    Complexity.intermediate: (
        'Create study notes about "{topic}"{subject_context} with moderate detail. '
        "Use a humorous, slightly sarcastic tone but include more substantial information. "
        "Structure it well with clear sections, include key concepts and some depth, but keep "
        "the witty, backbencher personality. Balance entertainment with learning."
    ),
    Complexity.advanced: (
        'Create comprehensive study notes about "{topic}"{subject_context}. '
        "Use a clever, sophisticated humor while covering the topic thoroughly. Include "
        "detailed explanations, multiple perspectives, and advanced concepts. Maintain the "
        "sarcastic edge but show deeper understanding. Write like a smart slacker who "
        "actually knows their stuff."
    ),
}

CHAT_TEMPLATE = (
    "You are a super chill AI study buddy for students. Talk like a cool friend who uses "
    "slang and casual language. Be helpful but keep it real and fun. Use words like "
    '"bruh", "fr", "nah", "lowkey", "highkey", "bet", "fam", "no cap", etc. '
    "Keep responses short and sweet, around 1-2 sentences max. Don't be too formal. "
    'User said: "{message}"'
)


# Plain str.format substitution; user text is embedded as-is
def build_excuse_prompt(situation: str, mood: Mood) -> str:
    return EXCUSE_TEMPLATES[Mood(mood)].format(situation=situation)


def build_notes_prompt(topic: str, complexity: Complexity, subject: Optional[str] = None) -> str:
    subject_context = f" in {subject}" if subject else ""
    return NOTES_TEMPLATES[Complexity(complexity)].format(
        topic=topic, subject_context=subject_context
    )


def build_chat_prompt(message: str) -> str:
    return CHAT_TEMPLATE.format(message=message)
