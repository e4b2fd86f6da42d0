import typing

import smfread.byte_cursor
import smfread.events
import smfread.status


StatusType = smfread.status.StatusType


# Number of data bytes following each channel voice status.
DATA_BYTE_COUNTS: typing.Dict[StatusType, int] = {
	StatusType.NOTE_OFF: 2,
	StatusType.NOTE_ON: 2,
	StatusType.POLYPHONIC_AFTERTOUCH: 2,
	StatusType.CONTROL_CHANGE: 2,
	StatusType.PROGRAM_CHANGE: 1,
	StatusType.CHANNEL_AFTERTOUCH: 1,
	StatusType.PITCH_BEND: 2,
}


def decode_channel_payload (status: smfread.status.Status, cursor: smfread.byte_cursor.ByteCursor) -> smfread.events.EventPayload:

	"""Consume the data bytes for a channel voice status.

	Parameters:
		status: A resolved voice status (anything but ``SYSTEM_MESSAGE``).
		cursor: Positioned at the first data byte.

	Returns:
		The payload object for the status category.

	Raises:
		ValueError: If called with a system message status.
		UnexpectedEofError: If the data bytes run past the end of the buffer.
	"""

	status_type = status.status_type

	if status_type in (StatusType.NOTE_OFF, StatusType.NOTE_ON, StatusType.POLYPHONIC_AFTERTOUCH):
		key = cursor.read_u8()
		velocity = cursor.read_u8()
		return smfread.events.NoteData(key=key, velocity=velocity)

	if status_type == StatusType.CONTROL_CHANGE:
		control_id = cursor.read_u8()
		value = cursor.read_u8()
		return smfread.events.ControlData(control_id=control_id, value=value)

	if status_type == StatusType.PROGRAM_CHANGE:
		return smfread.events.ProgramChangeData(program_id=cursor.read_u8())

	if status_type == StatusType.CHANNEL_AFTERTOUCH:
		return smfread.events.ChannelPressureData(pressure=cursor.read_u8())

	if status_type == StatusType.PITCH_BEND:
		low7 = cursor.read_u8()
		high7 = cursor.read_u8()
		return smfread.events.PitchBendData(low7=low7, high7=high7)

	raise ValueError(f"Not a channel voice status: 0x{status.raw_status:02X}")
