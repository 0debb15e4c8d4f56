"""Value models shared by the codecs and the orchestrator."""

from .date_parts import DateParts, days_in_month
from .values import PlainText, TypedText, XmlValue

__all__ = ["DateParts", "PlainText", "TypedText", "XmlValue", "days_in_month"]
