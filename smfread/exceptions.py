"""Error kinds raised while decoding a Standard MIDI File.

Every decode failure derives from ``SmfDecodeError`` (itself a ``ValueError``),
so callers can catch a single type at the boundary. Any of these aborts the
whole decode: no partial ``DecodedFile`` is returned.

An unrecognised non-meta system byte is *not* an exception. It is embedded in
the track as an ``ErrorData`` event and decoding carries on.
"""

import typing


class SmfDecodeError (ValueError):

	"""
	Base class for all decode failures.
	"""

	def __init__ (self, message: str, offset: typing.Optional[int] = None) -> None:

		"""
		Store the message and the byte offset where the problem was found, if known.
		"""

		self.offset = offset

		if offset is not None:
			message = f"{message} (at byte {offset})"

		super().__init__(message)


class UnexpectedEofError (SmfDecodeError):

	"""A read ran past the end of the buffer."""


class InvalidStatusByteError (SmfDecodeError):

	"""A byte was used as a status byte but its top nibble is below 0x8."""


class UnresolvedRunningStatusError (SmfDecodeError):

	"""A data byte appeared where a status was needed and no running status exists."""


class UnknownMetaTypeError (SmfDecodeError):

	"""A meta event carried a type byte that is not recognised."""


class IoFailureError (SmfDecodeError):

	"""The input file could not be opened or read."""
