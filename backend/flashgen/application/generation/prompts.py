"""Prompts and output schema for flashcard generation."""

from flashgen.application.generation.protocols import JsonSchemaFormat

SYSTEM_PROMPT = """
You are an assistant that writes study flashcards from the text a learner provides.
Each flashcard is a question/answer pair:
1. Focused: each card tests ONE fact or idea only
2. Precise: the question is unambiguous and has one clear answer
3. Self-contained: the card makes sense without the source text
4. Short: front at most 200 characters, back at most 500 characters
Write the cards in the language of the source text.
Skip trivia that a learner would not need to remember.
""".strip()

USER_PROMPT_TEMPLATE = """
Create flashcards from the following text:

{source_text}
""".strip()

FALLBACK_SYSTEM_PROMPT = """
You are an assistant that writes study flashcards from the text a learner provides.
Each card tests one fact, has an unambiguous question on the front and a short
answer on the back (front at most 200 characters, back at most 500 characters).
Respond with JSON only, no prose and no markdown, in exactly this shape:
{"flashcards": [{"front": "question", "back": "answer"}]}
""".strip()

FLASHCARDS_SCHEMA = JsonSchemaFormat(
    name="flashcards",
    schema={
        "type": "object",
        "properties": {
            "flashcards": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "front": {"type": "string"},
                        "back": {"type": "string"},
                    },
                    "required": ["front", "back"],
                    "additionalProperties": False,
                },
            }
        },
        "required": ["flashcards"],
        "additionalProperties": False,
    },
)


def build_user_prompt(source_text: str) -> str:
    return USER_PROMPT_TEMPLATE.format(source_text=source_text)
