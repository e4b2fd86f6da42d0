"""Status bytes and the per-track running-status state machine.

A status byte's top nibble selects the category (0x8-0xE are channel voice
messages, 0xF is the system family). The low nibble is the channel for voice
messages and the sub-type for system messages.

MIDI files may omit a voice status byte when it repeats the previous one
("running status"). ``RunningStatus`` remembers the last voice status in a
track and resolves each event's status from the next byte on the wire.
"""

import dataclasses
import enum
import typing

import smfread.byte_cursor
import smfread.exceptions


class StatusType (enum.IntEnum):

	"""
	Status categories keyed by their top-nibble value.
	"""

	NOTE_OFF = 0x80
	NOTE_ON = 0x90
	POLYPHONIC_AFTERTOUCH = 0xA0
	CONTROL_CHANGE = 0xB0
	PROGRAM_CHANGE = 0xC0
	CHANNEL_AFTERTOUCH = 0xD0
	PITCH_BEND = 0xE0
	SYSTEM_MESSAGE = 0xF0


@dataclasses.dataclass(frozen=True)
class Status:

	"""
	A resolved status: its category plus the raw byte it came from.
	"""

	status_type: StatusType
	raw_status: int


	@classmethod
	def from_byte (cls, byte: int) -> "Status":

		"""
		Classify a raw status byte.

		Raises:
			InvalidStatusByteError: If the top nibble is below 0x8 (a data byte).
		"""

		if not 0x80 <= byte <= 0xFF:
			raise smfread.exceptions.InvalidStatusByteError(f"Invalid status byte: 0x{byte:02X}")

		return cls(status_type=StatusType(byte & 0xF0), raw_status=byte)


	@property
	def is_system (self) -> bool:

		return self.status_type == StatusType.SYSTEM_MESSAGE


	@property
	def channel (self) -> typing.Optional[int]:

		"""
		Zero-based channel for voice messages, ``None`` for system messages.
		"""

		if self.is_system:
			return None

		return self.raw_status & 0x0F


class RunningStatus:

	"""
	Running-status context for a single track.

	Create a new instance for every track so a status from one track never leaks
	into the next.
	"""

	def __init__ (self) -> None:

		self.value: typing.Optional[int] = None


	def resolve (self, cursor: smfread.byte_cursor.ByteCursor) -> Status:

		"""
		Consume the status byte at the cursor, or reuse the running status.

		A byte with the high bit clear is put back (it is the first data byte of
		an implicit repeat) and the stored status is returned instead.

		Raises:
			UnresolvedRunningStatusError: A data byte appears with no prior status.
			UnexpectedEofError: The buffer is exhausted.
		"""

		offset = cursor.position
		byte = cursor.read_u8()

		if byte < 0x80:
			cursor.rewind()

			if self.value is None:
				raise smfread.exceptions.UnresolvedRunningStatusError(
					f"Data byte 0x{byte:02X} found with no running status",
					offset=offset
				)

			byte = self.value

		status = Status.from_byte(byte)
		self.update(status)

		return status


	def update (self, status: Status) -> None:

		"""
		Remember a voice status, or forget everything after a system message.
		"""

		if status.is_system:
			self.value = None

		else:
			self.value = status.raw_status
