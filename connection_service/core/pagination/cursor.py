"""Cursor encoding and decoding for pagination.

A cursor is the 1-based ordinal position of a row within the full,
unpaginated, ordered result set, written as decimal text and base64
encoded so that clients treat it as opaque.

Example:
    CursorCodec.encode(4)   # "NA=="
    CursorCodec.decode("NA==")  # 4

A cursor is only meaningful for the sort, direction and filter it was
minted under. Nothing in the cursor binds it to them, so reusing it against
another query yields a different (possibly empty) page rather than an error.
"""

from __future__ import annotations

import base64
import binascii

from connection_service.core.exceptions import ValidationException

INVALID_CURSOR = "Invalid cursor"
# Longest position that still fits a signed 64-bit OFFSET
MAX_CURSOR_DIGITS = 18


class CursorCodec:
    """Encode and decode position cursors."""

    @staticmethod
    def encode(position: int) -> str:
        """Encode a 1-based row position to an opaque string.

        Args:
            position: Positive row position

        Returns:
            Base64 encoded decimal text of the position
        """
        return base64.b64encode(str(position).encode("ascii")).decode("ascii")

    @staticmethod
    def decode(cursor: str) -> int:
        """Decode a cursor string to a row position.

        Args:
            cursor: Base64 encoded cursor string

        Returns:
            The positive row position the cursor denotes

        Raises:
            ValidationException: If the cursor is not base64 of a positive integer
                of at most ``MAX_CURSOR_DIGITS`` digits
        """
        try:
            text = base64.b64decode(cursor.encode("ascii"), validate=True).decode("ascii")
        except (binascii.Error, UnicodeError) as e:
            raise ValidationException(INVALID_CURSOR, extra={"cursor": cursor}) from e

        if not text.isdigit() or len(text) > MAX_CURSOR_DIGITS:
            raise ValidationException(INVALID_CURSOR, extra={"cursor": cursor})
        try:
            position = int(text)
        except ValueError as e:
            raise ValidationException(INVALID_CURSOR, extra={"cursor": cursor}) from e
        if position < 1:
            raise ValidationException(INVALID_CURSOR, extra={"cursor": cursor})
        return position


__all__ = ["INVALID_CURSOR", "MAX_CURSOR_DIGITS", "CursorCodec"]
