import conftest
import smfread
import smfread.summary


def _decoded () -> smfread.DecodedFile:

	body = conftest.text_event(0x03, b"Piano") + conftest.text_event(0x04, b"Grand") + conftest.tempo_event(500000)
	body += bytes([0x00, 0x90, 60, 100, 0x60, 0x80, 60, 0x00, 0x00, 0xF0, 0x01, 0xF7])
	body += b"\x00" + conftest.END_OF_TRACK

	return smfread.decode_bytes(conftest.smf(body, division=96))


def test_format_summary () -> None:

	"""The summary lists header, tempo and one line per track."""

	summary = smfread.summary.format_summary(_decoded())
	lines = summary.splitlines()

	assert lines[0] == "Format 1, 1 track(s), division 96 ticks/qn"
	assert lines[1] == "Tempo: 500000 us/qn (120 BPM)"
	assert "Piano" in lines[2]
	assert "[Grand]" in lines[2]
	assert "7 events" in lines[2]
	assert "96 ticks" in lines[2]
	assert lines[2].endswith("end")


def test_format_summary_without_tempo () -> None:

	"""Files with no tempo event say so."""

	midi_file = smfread.decode_bytes(conftest.smf(b"\x00" + conftest.END_OF_TRACK))

	assert "Tempo: not set" in smfread.summary.format_summary(midi_file)


def test_format_events_with_limit () -> None:

	"""Event listing shows payloads and truncates at the limit."""

	listing = smfread.summary.format_events(_decoded().tracks[0], limit=5)
	lines = listing.splitlines()

	assert len(lines) == 6
	assert "track_name 'Piano'" in lines[0]
	assert "set_tempo [7, 161, 32]" in lines[2]
	assert "note_on ch1" in lines[3]
	assert "key=60 (C4) velocity=100" in lines[3]
	assert lines[5] == "  ... 2 more"


def test_note_name () -> None:

	"""Note names use C4 = 60."""

	assert smfread.summary.note_name(60) == "C4"
	assert smfread.summary.note_name(21) == "A0"
	assert smfread.summary.note_name(70) == "A#4"
