from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContactForm:
    """Contact form payload as submitted by a visitor."""

    name: str
    email: str
    message: str
    contact_preference: str
    privacy: bool
    company: str | None = None
    phone: str | None = None
    service: str | None = None
    quantity: str | None = None


@dataclass(frozen=True)
class QuoteRequestForm:
    """Quote request payload sent alongside uploaded CAD files."""

    name: str
    email: str
    material: str
    quantity: int
    company: str | None = None
    phone: str | None = None
    precision: str | None = None
    delivery: str | None = None
    requirements: str | None = None


@dataclass(frozen=True)
class FormValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
