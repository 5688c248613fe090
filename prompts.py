"""
Prompt templates and response schema for the grammar correction call.
"""

from typing import Any, Dict

from models import Dialect, Tone
from text_compare import CorrectionType


# Gemini response schema (OpenAPI subset accepted by GenerateContentConfig.response_schema)
CORRECTION_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "rewrittenText": {
            "type": "STRING",
            "description": "The fully rewritten text in HTML format, preserving original tags and structure.",
        },
        "feedback": {
            "type": "STRING",
            "description": "A short, general comment from the 'Grammar Police' persona about the user's writing.",
        },
        "corrections": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "original": {"type": "STRING"},
                    "correction": {"type": "STRING"},
                    "explanation": {"type": "STRING"},
                    "type": {
                        "type": "STRING",
                        "enum": [t.value for t in CorrectionType],
                    },
                    "examples": {
                        "type": "ARRAY",
                        "items": {"type": "STRING"},
                        "description": (
                            "1-2 short, clear sentences demonstrating the correct usage "
                            "of the rule or word in the requested dialect."
                        ),
                    },
                },
                "required": ["original", "correction", "explanation", "type", "examples"],
            },
        },
    },
    "required": ["rewrittenText", "feedback", "corrections"],
}

PERSONAS = {
    Dialect.BRITISH: {
        "name": "Chief Inspector Punctuation of the Royal Grammar Police",
        "spelling_examples": "'colour', 'theatre', 'analyse', 'programme'",
        "tone": "polite, authoritative, stiff upper lip British",
    },
    Dialect.AMERICAN: {
        "name": "Sheriff Syntax of the Grammar Patrol",
        "spelling_examples": "'color', 'theater', 'analyze', 'program'",
        "tone": "firm, direct, folksy but professional American",
    },
}


def build_system_instruction(tone: Tone, dialect: Dialect) -> str:
    """
    Build the persona system instruction for a correction request.

    Args:
        tone: Rewrite tone requested by the user
        dialect: English dialect whose spelling and grammar are enforced

    Returns:
        System instruction text
    """
    persona = PERSONAS[dialect]
    name = persona["name"]
    dialect_name = dialect.value

    return f"""
You are {name}.
You are a native {dialect_name} English expert.
Your job is to correct the user's text, enforcing strict {dialect_name} English spelling (e.g., {persona["spelling_examples"]}) and grammar.

You must also adapt the text to the requested tone: {tone.value}.

IMPORTANT: The input text is provided in HTML.
- You MUST preserve all HTML tags (e.g., <b>, <i>, <ul>, <li>, <br>) and the overall structure.
- Do not strip the tags.
- Only correct the text content INSIDE the tags.
- If the user's input is plain text, you may add HTML tags (like <p>, <b>) where appropriate to improve readability.
- The 'rewrittenText' in the JSON response MUST be valid HTML.

Correction Detail Guidelines:
- For each correction, 'correction' must be copied exactly as it appears in 'rewrittenText'.
- For each correction, provide 'examples': a list of 1-2 short sentences showing how to correctly use the word or grammar rule in a {dialect_name} context.

Tone Guidelines:
- '{Tone.ORIGINAL.value}': Maintain the user's original style, voice, and intent exactly. Only fix objective grammar, spelling, and punctuation errors.
- '{Tone.CHAT.value}': Rewrite as a casual instant message. Use {dialect_name} slang if appropriate.
- '{Tone.EMAIL.value}': Rewrite as a professional email. Polite, clear, structured.
- '{Tone.SPEAKING.value}': Rewrite for speech. Focus on rhythm and flow.

Persona Guidelines:
- Always provide the 'feedback' as {name} ({persona["tone"]}).
- Analyze the text carefully. Return the result in JSON format.
""".strip()


def build_user_prompt(text: str) -> str:
    """Wrap the user's HTML in the correction request."""
    return f'Please correct and rewrite the following text.\n\nText: "{text}"'
