"""Decoded representation of a Standard MIDI File.

``DecodedFile`` owns a list of ``Track`` objects, each holding its ``Event``
list in file order. An event's ``data`` is one of the payload classes below;
which one is determined by the event's status category.
"""

import dataclasses
import typing

import smfread.status


MICROSECONDS_PER_MINUTE = 60_000_000


@dataclasses.dataclass(frozen=True)
class NoteData:

	"""Note on/off or polyphonic aftertouch (velocity holds the pressure)."""

	key: int
	velocity: int


@dataclasses.dataclass(frozen=True)
class ControlData:

	control_id: int
	value: int


@dataclasses.dataclass(frozen=True)
class ProgramChangeData:

	program_id: int


@dataclasses.dataclass(frozen=True)
class ChannelPressureData:

	pressure: int


@dataclasses.dataclass(frozen=True)
class PitchBendData:

	"""
	Pitch bend as two 7-bit halves, least significant first.
	"""

	low7: int
	high7: int


	@property
	def value (self) -> int:

		"""
		Combined 14-bit bend value (0-16383, centre 8192).
		"""

		return (self.high7 << 7) | self.low7


@dataclasses.dataclass(frozen=True)
class MetaData:

	"""
	Payload of a meta or sysex event.

	Holds raw byte values (one to five of them), a text string, or nothing. The
	shape depends only on the meta type byte.
	"""

	values: typing.Tuple[int, ...] = ()
	text: typing.Optional[str] = None


	@property
	def is_empty (self) -> bool:

		return not self.values and self.text is None


@dataclasses.dataclass(frozen=True)
class SysexData:

	"""
	Meta (0xFF) or sysex (0xF0/0xF7) event payload.

	``meta_type`` is the meta type byte, or ``None`` for sysex messages.
	"""

	meta: MetaData
	meta_type: typing.Optional[int] = None


@dataclasses.dataclass(frozen=True)
class ErrorData:

	"""An inline, non-fatal decode error for an unsupported system message."""

	message: str


EventPayload = typing.Union[
	NoteData,
	ControlData,
	ProgramChangeData,
	ChannelPressureData,
	PitchBendData,
	SysexData,
	ErrorData,
]


@dataclasses.dataclass
class Event:

	"""
	A single timed event. ``delta_tick`` counts ticks since the previous event in the same track.
	"""

	status: smfread.status.Status
	data: EventPayload
	delta_tick: int


@dataclasses.dataclass
class Track:

	"""
	One decoded track chunk.
	"""

	name: str = ""
	instrument: str = ""
	events: typing.List[Event] = dataclasses.field(default_factory=list)
	end_of_track: bool = False


	def absolute_ticks (self) -> typing.Iterator[typing.Tuple[int, Event]]:

		"""
		Yield ``(absolute_tick, event)`` pairs, accumulating the delta ticks.
		"""

		tick = 0

		for event in self.events:
			tick += event.delta_tick
			yield tick, event


	@property
	def total_ticks (self) -> int:

		return sum(event.delta_tick for event in self.events)


@dataclasses.dataclass
class DecodedFile:

	"""
	The complete result of decoding a file.

	``tempo`` (microseconds per quarter note) and ``bpm`` stay at zero until the
	first Set Tempo meta event, and are never changed afterwards. ``division`` is
	the raw header field and is always treated as ticks per quarter note.
	"""

	division: int = 0
	tempo: int = 0
	bpm: int = 0
	tracks: typing.List[Track] = dataclasses.field(default_factory=list)
	format: int = 0
	track_count: int = 0


	@property
	def tempo_is_set (self) -> bool:

		return self.tempo != 0


	def set_tempo (self, tempo: int) -> bool:

		"""
		Store the file tempo if it has not been set yet.

		Returns ``True`` when the value was stored. A zero tempo is never stored,
		since zero means "unset".
		"""

		if self.tempo_is_set or tempo == 0:
			return False

		self.tempo = tempo
		self.bpm = MICROSECONDS_PER_MINUTE // tempo

		return True


	@property
	def uses_smpte_division (self) -> bool:

		"""
		True when the division's top bit marks SMPTE frames rather than ticks per quarter note.

		Timing calculations do not act on this; it is reported so callers can
		detect files whose delays will be wrong.
		"""

		return bool(self.division & 0x8000)


	def delay_microseconds (self, delta_tick: int) -> float:

		"""
		Convert a delta in ticks to microseconds using the file tempo and division.
		"""

		if not self.division or not self.tempo:
			return 0.0

		return delta_tick * self.tempo / self.division
