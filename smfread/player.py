"""Play a decoded file to a mido output port.

Events from all tracks are merged by absolute tick and sent in order, sleeping
``delta_tick * tempo / division`` microseconds between them. Meta and sysex
events are not sent but still take part in the timeline.
"""

import heapq
import logging
import time
import typing

import mido

import smfread.events
import smfread.notes
import smfread.status


logger = logging.getLogger(__name__)

StatusType = smfread.status.StatusType

# 120 BPM, the SMF default when a file has no tempo event.
DEFAULT_TEMPO = 500_000

PITCHWHEEL_CENTRE = 8192


def map_note (key: int) -> typing.Optional[int]:

	"""
	Map a decoded key through pitch class and octave, or ``None`` if it is below A0.
	"""

	split = smfread.notes.PitchClass.from_note_number(key)

	if split is None:
		return None

	pitch_class, octave = split

	try:
		return pitch_class.octave(octave)
	except smfread.notes.NoteRangeError:
		return None


def _tagged (index: int, track: smfread.events.Track) -> typing.Iterator[typing.Tuple[int, int, smfread.events.Event]]:

	for tick, event in track.absolute_ticks():
		yield tick, index, event


class Player:

	"""
	Turns a ``DecodedFile`` into timed mido messages and sends them.
	"""

	def __init__ (
		self,
		midi_file: smfread.events.DecodedFile,
		midi_out: typing.Any,
		channel: typing.Optional[int] = None,
		sleep: typing.Optional[typing.Callable[[float], None]] = None
	) -> None:

		"""Prepare playback.

		Parameters:
			midi_file: The decoded file to play.
			midi_out: An open mido output port (anything with ``send()`` and ``reset()``).
			channel: When set, every voice message is sent on this channel instead
				of the channel it was recorded on.
			sleep: Called with the wait in seconds before each message
				(defaults to ``time.sleep``).
		"""

		if channel is not None and not 0 <= channel <= 15:
			raise ValueError("Channel must be between 0 and 15")

		self.midi_file = midi_file
		self.midi_out = midi_out
		self.channel = channel
		self._sleep = sleep if sleep is not None else time.sleep

		self.tempo = midi_file.tempo or DEFAULT_TEMPO

		if midi_file.uses_smpte_division:
			logger.warning("File uses SMPTE division; playback timing treats it as ticks per quarter note")


	def seconds_for_ticks (self, ticks: int) -> float:

		if not self.midi_file.division:
			return 0.0

		return ticks * self.tempo / self.midi_file.division / 1_000_000


	def timeline (self) -> typing.Iterator[typing.Tuple[int, smfread.events.Event]]:

		"""
		Yield ``(absolute_tick, event)`` for all tracks, merged in tick order.

		Events at the same tick keep track order, then file order.
		"""

		streams = [_tagged(index, track) for index, track in enumerate(self.midi_file.tracks)]

		for tick, _index, event in heapq.merge(*streams, key=lambda item: (item[0], item[1])):
			yield tick, event


	def to_message (self, event: smfread.events.Event) -> typing.Optional[mido.Message]:

		"""
		Build the mido message for a voice event, or ``None`` if nothing should be sent.

		Events whose data bytes mido rejects (0x80 or above) are logged and skipped.
		"""

		try:
			return self._build_message(event)
		except ValueError as e:
			logger.warning(f"Skipping event with out-of-range data {event.data}: {e}")
			return None


	def _build_message (self, event: smfread.events.Event) -> typing.Optional[mido.Message]:

		status = event.status
		data = event.data

		if status.is_system:
			return None

		channel = self.channel if self.channel is not None else status.channel

		if status.status_type in (StatusType.NOTE_ON, StatusType.NOTE_OFF) and isinstance(data, smfread.events.NoteData):
			note = map_note(data.key)

			if note is None:
				logger.warning(f"Skipping note {data.key}: below the lowest playable note")
				return None

			if status.status_type == StatusType.NOTE_ON:
				return mido.Message('note_on', channel=channel, note=note, velocity=data.velocity)

			return mido.Message('note_off', channel=channel, note=note, velocity=0)

		if isinstance(data, smfread.events.NoteData):
			return mido.Message('polytouch', channel=channel, note=data.key, value=data.velocity)

		if isinstance(data, smfread.events.ControlData):
			return mido.Message('control_change', channel=channel, control=data.control_id, value=data.value)

		if isinstance(data, smfread.events.ProgramChangeData):
			return mido.Message('program_change', channel=channel, program=data.program_id)

		if isinstance(data, smfread.events.ChannelPressureData):
			return mido.Message('aftertouch', channel=channel, value=data.pressure)

		if isinstance(data, smfread.events.PitchBendData):
			return mido.Message('pitchwheel', channel=channel, pitch=data.value - PITCHWHEEL_CENTRE)

		return None


	def messages (self) -> typing.Iterator[typing.Tuple[float, mido.Message]]:

		"""
		Yield ``(wait_seconds, message)`` pairs in playback order.

		Waits for events that produce no message are carried over to the next
		message, so absolute timing is preserved.
		"""

		previous_tick = 0

		for tick, event in self.timeline():
			message = self.to_message(event)

			if message is None:
				continue

			yield self.seconds_for_ticks(tick - previous_tick), message
			previous_tick = tick


	def play (self) -> int:

		"""
		Send every message with its timing, then reset the port. Returns the number of messages sent.
		"""

		logger.info(f"Playing {len(self.midi_file.tracks)} track(s) at {self.tempo} us/qn, division {self.midi_file.division}")

		sent = 0

		try:
			for wait, message in self.messages():

				if wait > 0:
					self._sleep(wait)

				self.midi_out.send(message)
				sent += 1

		finally:
			self.midi_out.reset()

		logger.info(f"Playback finished: {sent} message(s) sent")

		return sent
