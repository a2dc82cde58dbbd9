"""
Attachment domain models.

Dependencies: pydantic
System role: Note/attachment upload contract
"""

import base64

from pydantic import BaseModel, Field

DEFAULT_MIME_TYPE = "application/pdf"


class AttachmentUpload(BaseModel):
    """Note text plus an optional file to store on an attachment record."""

    subject: str = Field(default="", description="Note title")
    note_text: str = Field(default="", description="Note body")
    content: bytes | None = Field(default=None, description="Raw file bytes")
    filename: str | None = None
    mime_type: str | None = None

    @property
    def has_file(self) -> bool:
        return self.content is not None

    def document_fields(self) -> dict[str, str]:
        """
        Store fields for the file part of the note.

        Without a file the three document fields are cleared.
        """
        if self.content is None:
            return {"documentbody": "", "filename": "", "mimetype": ""}
        return {
            "documentbody": base64.b64encode(self.content).decode("ascii"),
            "filename": self.filename or "",
            "mimetype": self.mime_type or DEFAULT_MIME_TYPE,
        }
