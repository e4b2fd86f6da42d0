import logging

import pytest

import conftest
import smfread.byte_cursor
import smfread.events
import smfread.exceptions
import smfread.meta
import smfread.status


def _decode (status_byte: int, body: bytes, midi_file: smfread.events.DecodedFile = None, track: smfread.events.Track = None):

	"""Decode a system message body; returns (payload, track, file, cursor)."""

	midi_file = midi_file if midi_file is not None else smfread.events.DecodedFile()
	track = track if track is not None else smfread.events.Track()
	cursor = smfread.byte_cursor.ByteCursor(body)
	status = smfread.status.Status.from_byte(status_byte)

	payload = smfread.meta.decode_system_message(status, cursor, track, midi_file)

	return payload, track, midi_file, cursor


def test_sequence_number () -> None:

	"""Sequence number reads two raw bytes."""

	payload, _, _, cursor = _decode(0xFF, b"\x00\x02\x00\x07")

	assert payload.meta == smfread.events.MetaData(values=(0, 7))
	assert payload.meta_type == smfread.meta.MetaType.SEQUENCE_NUMBER
	assert cursor.remaining() == 0


@pytest.mark.parametrize("meta_type", [0x01, 0x02, 0x05, 0x06, 0x07, 0x7F])
def test_text_family_has_no_side_effect (meta_type: int) -> None:

	"""Text-like meta events return their text and leave the track alone."""

	payload, track, _, _ = _decode(0xFF, bytes([meta_type, 0x05]) + b"hello")

	assert payload.meta.text == "hello"
	assert track.name == ""
	assert track.instrument == ""


def test_track_name_sets_track () -> None:

	"""Track name is copied onto the track."""

	payload, track, _, _ = _decode(0xFF, b"\x03\x05Piano")

	assert payload.meta.text == "Piano"
	assert track.name == "Piano"


def test_instrument_name_sets_track () -> None:

	"""Instrument name is copied onto the track."""

	payload, track, _, _ = _decode(0xFF, b"\x04\x06Violin")

	assert payload.meta.text == "Violin"
	assert track.instrument == "Violin"


def test_channel_prefix () -> None:

	"""Channel prefix reads one byte."""

	payload, _, _, _ = _decode(0xFF, b"\x20\x01\x09")

	assert payload.meta.values == (9,)


def test_end_of_track () -> None:

	"""End of track has no payload and marks the track ended."""

	payload, track, _, cursor = _decode(0xFF, b"\x2F\x00")

	assert payload.meta.is_empty
	assert track.end_of_track is True
	assert cursor.remaining() == 0


def test_first_tempo_sets_file_tempo_and_bpm () -> None:

	"""The first tempo event stores tempo and derives BPM."""

	payload, _, midi_file, _ = _decode(0xFF, b"\x51\x03\x07\xA1\x20")

	assert payload.meta.values == (0x07, 0xA1, 0x20)
	assert midi_file.tempo == 500000
	assert midi_file.bpm == 120


def test_later_tempo_is_consumed_but_ignored () -> None:

	"""A second tempo event keeps the cursor aligned but changes nothing."""

	midi_file = smfread.events.DecodedFile()
	_decode(0xFF, b"\x51\x03\x07\xA1\x20", midi_file=midi_file)

	payload, _, _, cursor = _decode(0xFF, b"\x51\x03\x0F\x42\x40", midi_file=midi_file)

	assert payload.meta.is_empty
	assert cursor.remaining() == 0
	assert midi_file.tempo == 500000
	assert midi_file.bpm == 120


def test_zero_tempo_is_not_stored (caplog: pytest.LogCaptureFixture) -> None:

	"""A zero tempo keeps its payload and logs a warning; a later tempo still counts."""

	with caplog.at_level(logging.WARNING):
		payload, _, midi_file, _ = _decode(0xFF, b"\x51\x03\x00\x00\x00")

	assert payload.meta.values == (0, 0, 0)
	assert midi_file.tempo == 0
	assert midi_file.bpm == 0
	assert not midi_file.tempo_is_set
	assert "tempo of zero" in caplog.text

	_decode(0xFF, b"\x51\x03\x07\xA1\x20", midi_file=midi_file)

	assert midi_file.tempo == 500000
	assert midi_file.bpm == 120


def test_smpte_offset () -> None:

	"""SMPTE offset reads five raw bytes."""

	payload, _, _, _ = _decode(0xFF, b"\x54\x05\x60\x00\x03\x00\x00")

	assert payload.meta.values == (0x60, 0, 3, 0, 0)


def test_time_signature_denominator_is_shifted () -> None:

	"""The denominator byte is stored as 2 << raw."""

	payload, _, _, _ = _decode(0xFF, b"\x58\x04\x06\x02\x18\x08")

	assert payload.meta.values == (6, 8, 24, 8)


def test_key_signature () -> None:

	"""Key signature reads two raw bytes."""

	payload, _, _, _ = _decode(0xFF, b"\x59\x02\xFD\x01")

	assert payload.meta.values == (0xFD, 1)


def test_unknown_meta_type_raises () -> None:

	"""An unrecognised meta type aborts with UnknownMetaTypeError."""

	with pytest.raises(smfread.exceptions.UnknownMetaTypeError) as info:
		_decode(0xFF, b"\x09\x00")

	assert info.value.offset == 0


@pytest.mark.parametrize("status_byte", [0xF0, 0xF7])
def test_sysex_payload (status_byte: int) -> None:

	"""Sysex reads a length-prefixed opaque payload."""

	body = bytes([0x7E, 0x7F, 0x09, 0x01, 0xF7])
	payload, _, _, cursor = _decode(status_byte, conftest.vlq(len(body)) + body)

	assert payload.meta_type is None
	assert len(payload.meta.text) == len(body)
	assert cursor.remaining() == 0


def test_other_system_message_is_inline_error (caplog: pytest.LogCaptureFixture) -> None:

	"""Unsupported system bytes become ErrorData and consume nothing."""

	with caplog.at_level(logging.WARNING):
		payload, _, _, cursor = _decode(0xF2, b"\x00\x10")

	assert payload == smfread.events.ErrorData(message=smfread.meta.SYSTEM_MESSAGE_ERROR)
	assert cursor.position == 0
	assert "0xF2" in caplog.text
