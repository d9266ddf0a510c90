"""Schema of the completion provider's response.

Only the fields the relay reads are declared; everything else in the
provider payload is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class CompletionMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str | None = None


class CompletionChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: CompletionMessage


class CompletionPayload(BaseModel):
    """Decoded ``/chat/completions`` body with at least one choice."""

    model_config = ConfigDict(extra="ignore")

    choices: list[CompletionChoice] = Field(..., min_length=1)

    @property
    def first_content(self) -> str:
        return self.choices[0].message.content or ""


class CompletionResult(BaseModel):
    """Reply text extracted from a successful completion."""

    model_config = ConfigDict(frozen=True)

    reply: str
