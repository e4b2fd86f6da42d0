"""Decoding of the system message family: meta events and sysex.

Meta events (status 0xFF) are a type byte, a variable-length size and a
payload. Their shape is fixed by the type byte:

- Sequence number, key signature: 2 raw bytes
- Channel prefix: 1 raw byte
- Set tempo: 3 raw bytes (24-bit microseconds per quarter note)
- Time signature: 4 raw bytes, denominator stored as ``2 << raw``
- SMPTE offset: 5 raw bytes
- Text family (text, copyright, track name, instrument name, lyric, marker,
  cue point, sequencer specific): ``size`` bytes of text
- End of track: nothing

Fixed-size types read their fixed byte count whatever the declared size is.

Some meta events also update the track or file: track name, instrument name,
end of track, and the first set tempo in the file.

Sysex messages (0xF0, 0xF7) are a variable-length size followed by opaque
bytes, returned as lossy text. Any other 0xF_ status becomes an ``ErrorData``
payload so the rest of the track still decodes.
"""

import enum
import logging
import typing

import smfread.byte_cursor
import smfread.events
import smfread.exceptions
import smfread.status


logger = logging.getLogger(__name__)


META_STATUS = 0xFF
SYSEX_STATUS = 0xF0
SYSEX_ESCAPE_STATUS = 0xF7

SYSTEM_MESSAGE_ERROR = "Failed to parse data from system message"


class MetaType (enum.IntEnum):

	SEQUENCE_NUMBER = 0x00
	TEXT = 0x01
	COPYRIGHT = 0x02
	TRACK_NAME = 0x03
	INSTRUMENT_NAME = 0x04
	LYRICS = 0x05
	MARKER = 0x06
	CUE_POINT = 0x07
	CHANNEL_PREFIX = 0x20
	END_OF_TRACK = 0x2F
	SET_TEMPO = 0x51
	SMPTE_OFFSET = 0x54
	TIME_SIGNATURE = 0x58
	KEY_SIGNATURE = 0x59
	SEQUENCER_SPECIFIC = 0x7F


# Meta types whose payload is a run of raw bytes, with the byte count.
FIXED_SIZE_TYPES: typing.Dict[MetaType, int] = {
	MetaType.SEQUENCE_NUMBER: 2,
	MetaType.CHANNEL_PREFIX: 1,
	MetaType.SMPTE_OFFSET: 5,
	MetaType.TIME_SIGNATURE: 4,
	MetaType.KEY_SIGNATURE: 2,
}

# Meta types whose payload is text with no side effect.
TEXT_TYPES: typing.FrozenSet[MetaType] = frozenset({
	MetaType.TEXT,
	MetaType.COPYRIGHT,
	MetaType.LYRICS,
	MetaType.MARKER,
	MetaType.CUE_POINT,
	MetaType.SEQUENCER_SPECIFIC,
})


def _meta_type_from_byte (byte: int, offset: int) -> MetaType:

	"""
	Look up a meta type, raising ``UnknownMetaTypeError`` for unrecognised bytes.
	"""

	try:
		return MetaType(byte)
	except ValueError:
		raise smfread.exceptions.UnknownMetaTypeError(f"Unknown meta event type: 0x{byte:02X}", offset=offset) from None


def _read_fixed (cursor: smfread.byte_cursor.ByteCursor, count: int) -> typing.Tuple[int, ...]:

	return tuple(cursor.read_bytes(count))


def decode_meta_event (
	cursor: smfread.byte_cursor.ByteCursor,
	track: smfread.events.Track,
	midi_file: smfread.events.DecodedFile
) -> smfread.events.SysexData:

	"""Decode a meta event body, cursor positioned just after the 0xFF status.

	Applies the track and file side effects of track name, instrument name,
	end of track and set tempo.

	Raises:
		UnknownMetaTypeError: The type byte is not a recognised meta type.
		UnexpectedEofError: The payload runs past the end of the buffer.
	"""

	type_offset = cursor.position
	meta_type = _meta_type_from_byte(cursor.read_u8(), type_offset)
	length = cursor.read_variable_length()

	meta: smfread.events.MetaData

	if meta_type in FIXED_SIZE_TYPES:
		values = _read_fixed(cursor, FIXED_SIZE_TYPES[meta_type])

		if meta_type == MetaType.TIME_SIGNATURE:
			numerator, denominator, clocks, thirty_seconds = values
			values = (numerator, 2 << denominator, clocks, thirty_seconds)

		meta = smfread.events.MetaData(values=values)

	elif meta_type in TEXT_TYPES:
		meta = smfread.events.MetaData(text=cursor.read_text(length))

	elif meta_type == MetaType.TRACK_NAME:
		track.name = cursor.read_text(length)
		meta = smfread.events.MetaData(text=track.name)

	elif meta_type == MetaType.INSTRUMENT_NAME:
		track.instrument = cursor.read_text(length)
		meta = smfread.events.MetaData(text=track.instrument)

	elif meta_type == MetaType.END_OF_TRACK:
		track.end_of_track = True
		meta = smfread.events.MetaData()

	else:
		meta = _decode_set_tempo(cursor, midi_file)

	return smfread.events.SysexData(meta=meta, meta_type=int(meta_type))


def _decode_set_tempo (cursor: smfread.byte_cursor.ByteCursor, midi_file: smfread.events.DecodedFile) -> smfread.events.MetaData:

	"""
	Consume a set tempo payload; only the first one in a file is kept.
	"""

	values = _read_fixed(cursor, 3)

	if midi_file.tempo_is_set:
		logger.debug(f"Ignoring later tempo event (tempo already {midi_file.tempo} us/qn)")
		return smfread.events.MetaData()

	tempo = (values[0] << 16) | (values[1] << 8) | values[2]

	if not midi_file.set_tempo(tempo):
		logger.warning("Ignoring set tempo event with a tempo of zero")

	return smfread.events.MetaData(values=values)


def decode_sysex (cursor: smfread.byte_cursor.ByteCursor) -> smfread.events.SysexData:

	"""
	Decode a sysex body: a variable-length size, then that many opaque bytes.
	"""

	length = cursor.read_variable_length()
	return smfread.events.SysexData(meta=smfread.events.MetaData(text=cursor.read_text(length)))


def decode_system_message (
	status: smfread.status.Status,
	cursor: smfread.byte_cursor.ByteCursor,
	track: smfread.events.Track,
	midi_file: smfread.events.DecodedFile
) -> smfread.events.EventPayload:

	"""Decode the payload of any 0xF_ status.

	Meta and sysex errors propagate. Other system bytes are recovered locally:
	no bytes are consumed and an ``ErrorData`` payload is returned.
	"""

	if status.raw_status == META_STATUS:
		return decode_meta_event(cursor, track, midi_file)

	if status.raw_status in (SYSEX_STATUS, SYSEX_ESCAPE_STATUS):
		return decode_sysex(cursor)

	logger.warning(f"Unsupported system message 0x{status.raw_status:02X} at byte {cursor.position}; recorded as an error event")

	return smfread.events.ErrorData(message=SYSTEM_MESSAGE_ERROR)
