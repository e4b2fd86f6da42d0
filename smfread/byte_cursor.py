import typing

import smfread.exceptions


class ByteCursor:

	"""
	Sequential big-endian reader over an immutable byte buffer.

	All reads advance the cursor. A read that needs more bytes than remain raises
	``UnexpectedEofError`` and leaves the position unchanged.
	"""

	def __init__ (self, data: typing.Union[bytes, bytearray, memoryview]) -> None:

		"""
		Wrap ``data`` and start reading at offset zero.
		"""

		self._data = bytes(data)
		self.position = 0


	def remaining (self) -> int:

		"""
		Return the number of unread bytes.
		"""

		return len(self._data) - self.position


	def _take (self, count: int) -> bytes:

		"""
		Consume ``count`` bytes, or raise if the buffer is too short.
		"""

		if count < 0:
			raise ValueError("Byte count cannot be negative")

		if count > self.remaining():
			raise smfread.exceptions.UnexpectedEofError(
				f"Needed {count} byte(s) but only {self.remaining()} remain",
				offset=self.position
			)

		start = self.position
		self.position += count
		return self._data[start:self.position]


	def read_u8 (self) -> int:

		"""
		Read one unsigned byte.
		"""

		return self._take(1)[0]


	def read_u16 (self) -> int:

		"""
		Read a big-endian unsigned 16-bit integer.
		"""

		return int.from_bytes(self._take(2), byteorder="big")


	def read_u32 (self) -> int:

		"""
		Read a big-endian unsigned 32-bit integer.
		"""

		return int.from_bytes(self._take(4), byteorder="big")


	def read_bytes (self, count: int) -> bytes:

		"""
		Return an owned copy of the next ``count`` bytes.
		"""

		return self._take(count)


	def read_text (self, count: int) -> str:

		"""
		Read ``count`` bytes and decode them as UTF-8.

		Invalid sequences are replaced with U+FFFD rather than raising.
		"""

		return self._take(count).decode("utf-8", errors="replace")


	def peek_u8 (self) -> int:

		"""
		Return the next byte without consuming it.
		"""

		if self.remaining() < 1:
			raise smfread.exceptions.UnexpectedEofError("Cannot peek past end of buffer", offset=self.position)

		return self._data[self.position]


	def rewind (self, count: int = 1) -> None:

		"""
		Step back over ``count`` bytes that were already read.

		Used to put a data byte back after it turned out not to be a status byte.
		"""

		if count < 0 or count > self.position:
			raise ValueError(f"Cannot rewind {count} byte(s) from position {self.position}")

		self.position -= count


	def read_variable_length (self) -> int:

		"""
		Decode a MIDI variable-length quantity at the cursor.
		"""

		return read_variable_length(self)


def read_variable_length (cursor: ByteCursor) -> int:

	"""Decode a variable-length quantity (VLQ).

	Each byte contributes its low seven bits, most significant group first. A set
	high bit means another byte follows. There is no length cap: a run of
	continuation bytes keeps reading until the buffer is exhausted.

	Example:
		```python
		read_variable_length(ByteCursor(b"\\x81\\x48"))  # → 200
		```
	"""

	value = cursor.read_u8()

	if value & 0x80:
		value &= 0x7F

		while True:
			byte = cursor.read_u8()
			value = (value << 7) | (byte & 0x7F)

			if not byte & 0x80:
				break

	return value
