# recordkit/exceptions/base.py
import logging


class RecordKitError(Exception):
    """Base for all recordkit exceptions."""


# ----------------------------------------------------------------------------
# Decoration conditions
# ----------------------------------------------------------------------------
class DecorationCondition(RecordKitError):
    """A recoverable condition raised while decorating or reading a record.

    Conditions are normally *reported* (logged at ``level``) rather than raised;
    see :func:`recordkit.records.diagnostics.report`.
    """

    level: int = logging.ERROR

    @property
    def is_notice(self) -> bool:
        return self.level < logging.WARNING


class AlreadyResolvedError(DecorationCondition):
    """Association resolution requested for an association that is already decorated."""

    level = logging.INFO


class UnknownAssociationError(DecorationCondition):
    """Resolution requested for a name absent from the association set."""


class InvalidTargetTypeError(DecorationCondition):
    """The registered type for an association is not a RecordDecorator subclass."""


class MalformedAssociationError(DecorationCondition):
    """Raw association data that cannot be ingested by a wrapper."""


class UndefinedPropertyError(DecorationCondition):
    """Uniform property access missed every lookup tier."""

    level = logging.INFO
