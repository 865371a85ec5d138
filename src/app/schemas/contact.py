from __future__ import annotations

from pydantic import BaseModel


class ContactRequest(BaseModel):
    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""

    def missing_fields(self) -> list[str]:
        return [
            field for field in ("name", "email", "subject", "message")
            if not getattr(self, field).strip()
        ]


class ContactResponse(BaseModel):
    message: str = "Email sent successfully"
