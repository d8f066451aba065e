"""Reference kinds that command arguments can point at."""

from enum import Enum


class ReferenceKind(str, Enum):
    """Kinds of entity a mention token can resolve to.

    Each kind has the sigil used to mention it in a note, e.g. `@alice`,
    `~bug`, `%"v2.0"`.
    """

    USER = "user"
    LABEL = "label"
    MILESTONE = "milestone"

    @property
    def sigil(self) -> str:
        return _SIGILS[self]

    def strip_sigil(self, token: str) -> str:
        """Remove this kind's sigil from the start of a token, if present.

        Args:
            token: Raw token such as "~bug" or "bug".

        Returns:
            The token without its leading sigil.
        """
        if token.startswith(self.sigil):
            return token[len(self.sigil) :]
        return token


_SIGILS = {
    ReferenceKind.USER: "@",
    ReferenceKind.LABEL: "~",
    ReferenceKind.MILESTONE: "%",
}
