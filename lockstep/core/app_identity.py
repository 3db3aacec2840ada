"""App identifier (``.lockstep/identifier``).

A single opaque token generated the first time a project is bound and
never changed afterwards. Constraint edits do not touch it.
"""

from __future__ import annotations

import secrets
from pathlib import Path
from typing import Optional, Union

from lockstep.utils.logger import get_logger
from lockstep.exceptions import MissingIdentifierError
from lockstep.utils.filesystem import read_text_or_none, safe_write_file
from lockstep.constants import IDENTIFIER_TOKEN_BYTES, IDENTIFIER_TOKEN_COUNT

logger = get_logger("app_identity")


def random_token() -> str:
    return secrets.token_hex(IDENTIFIER_TOKEN_BYTES)


def generate_identifier() -> str:
    """Concatenate independently generated random tokens."""
    return "".join(random_token() for _ in range(IDENTIFIER_TOKEN_COUNT))


class AppIdentity:
    """Creates the identifier file on demand and reads it back."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.app_id: Optional[str] = None

    def ensure(self) -> str:
        """Return the project's identifier, generating it if needed.

        Raises:
            MissingIdentifierError: The file is still absent after writing.
        """
        if not self.path.exists():
            safe_write_file(self.path, generate_identifier())
            logger.info("Generated app identifier at %s", self.path)

        app_id = read_text_or_none(self.path)
        if app_id is None:
            raise MissingIdentifierError(
                f"Expected a file at {self.path}",
                file_path=str(self.path),
                operation="read",
            )

        self.app_id = app_id
        return app_id
