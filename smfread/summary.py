"""Plain-text rendering of a decoded file for the command line.

``format_summary()`` gives one header block and one line per track::

	Format 1, 2 track(s), division 480 ticks/qn
	Tempo: 500000 us/qn (120 BPM)
	  0  Piano        [Acoustic Grand]   12 events   1920 ticks  end

``format_events()`` lists a track's events, one per line.
"""

import typing

import smfread.events
import smfread.meta


_NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_NAME_WIDTH = 16


def note_name (key: int) -> str:

	"""Return a note name such as ``C4`` (C4 = 60)."""

	return f"{_NOTE_NAMES[key % 12]}{key // 12 - 1}"


def format_summary (midi_file: smfread.events.DecodedFile) -> str:

	"""
	Describe the header, tempo and each track of a decoded file.
	"""

	lines: typing.List[str] = []

	if midi_file.uses_smpte_division:
		division = f"division 0x{midi_file.division:04X} (SMPTE)"
	else:
		division = f"division {midi_file.division} ticks/qn"

	lines.append(f"Format {midi_file.format}, {len(midi_file.tracks)} track(s), {division}")

	if midi_file.tempo_is_set:
		lines.append(f"Tempo: {midi_file.tempo} us/qn ({midi_file.bpm} BPM)")
	else:
		lines.append("Tempo: not set")

	for index, track in enumerate(midi_file.tracks):
		name = track.name or "-"
		instrument = f"[{track.instrument}]" if track.instrument else ""
		end = "end" if track.end_of_track else "no end"

		lines.append(
			f"{index:3d}  {name:<{_NAME_WIDTH}} {instrument:<{_NAME_WIDTH + 2}} "
			f"{len(track.events):5d} events  {track.total_ticks:7d} ticks  {end}"
		)

	return "\n".join(lines)


def describe_payload (event: smfread.events.Event) -> str:

	"""One-line description of an event payload."""

	data = event.data

	if isinstance(data, smfread.events.NoteData):
		return f"key={data.key} ({note_name(data.key)}) velocity={data.velocity}"

	if isinstance(data, smfread.events.ControlData):
		return f"control={data.control_id} value={data.value}"

	if isinstance(data, smfread.events.ProgramChangeData):
		return f"program={data.program_id}"

	if isinstance(data, smfread.events.ChannelPressureData):
		return f"pressure={data.pressure}"

	if isinstance(data, smfread.events.PitchBendData):
		return f"bend={data.value}"

	if isinstance(data, smfread.events.ErrorData):
		return f"error: {data.message}"

	if data.meta_type is not None:
		try:
			label = smfread.meta.MetaType(data.meta_type).name.lower()
		except ValueError:
			label = f"meta 0x{data.meta_type:02X}"
	else:
		label = "sysex"

	if data.meta.text is not None:
		return f"{label} {data.meta.text!r}"

	if data.meta.values:
		return f"{label} {list(data.meta.values)}"

	return label


def format_events (track: smfread.events.Track, limit: typing.Optional[int] = None) -> str:

	"""
	List a track's events with absolute tick, delta, status and payload.
	"""

	lines: typing.List[str] = []

	for count, (tick, event) in enumerate(track.absolute_ticks()):

		if limit is not None and count >= limit:
			lines.append(f"  ... {len(track.events) - limit} more")
			break

		status = event.status
		label = status.status_type.name.lower()

		if status.channel is not None:
			label += f" ch{status.channel + 1}"

		lines.append(f"  {tick:7d} (+{event.delta_tick:<5d}) {label:<28} {describe_payload(event)}")

	return "\n".join(lines)
