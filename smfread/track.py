import logging

import smfread.byte_cursor
import smfread.events
import smfread.meta
import smfread.payload
import smfread.status


logger = logging.getLogger(__name__)


def decode_event (
	cursor: smfread.byte_cursor.ByteCursor,
	running_status: smfread.status.RunningStatus,
	track: smfread.events.Track,
	midi_file: smfread.events.DecodedFile
) -> smfread.events.Event:

	"""
	Decode one event: delta time, then status (explicit or running), then payload.
	"""

	delta_tick = cursor.read_variable_length()
	status = running_status.resolve(cursor)

	data: smfread.events.EventPayload

	if status.is_system:
		data = smfread.meta.decode_system_message(status, cursor, track, midi_file)

	else:
		data = smfread.payload.decode_channel_payload(status, cursor)

	return smfread.events.Event(status=status, data=data, delta_tick=delta_tick)


def decode_track (cursor: smfread.byte_cursor.ByteCursor, midi_file: smfread.events.DecodedFile) -> smfread.events.Track:

	"""Decode events until end of track or until the buffer runs out.

	The cursor must sit just after the track chunk header. The chunk's declared
	length is not used as a bound: decoding stops at the End Of Track meta event
	or when the whole buffer is exhausted, whichever comes first. Running out of
	bytes without an End Of Track event is not an error.
	"""

	track = smfread.events.Track()
	running_status = smfread.status.RunningStatus()

	while cursor.remaining() and not track.end_of_track:
		track.events.append(decode_event(cursor, running_status, track, midi_file))

	if not track.end_of_track:
		logger.debug(f"Track '{track.name}' ran out of bytes without an end-of-track event")

	return track
