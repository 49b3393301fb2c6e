"""JBB text format — the persisted s-expression form of a pattern document."""

from beadrope.jbb.parser import JbbParseError, parse_jbb
from beadrope.jbb.serializer import serialize_jbb

__all__ = ["JbbParseError", "parse_jbb", "serialize_jbb"]
