"""File-level decoding: header chunk, then one track per declared track chunk.

Chunk ids, the header length and the format are read but not checked, and the
track chunk lengths are not used for bounds. Malformed input is caught by
running out of buffer or by the event decoders themselves.
"""

import logging
import os
import typing

import smfread.byte_cursor
import smfread.events
import smfread.exceptions
import smfread.track


logger = logging.getLogger(__name__)


def decode_bytes (data: typing.Union[bytes, bytearray, memoryview]) -> smfread.events.DecodedFile:

	"""Decode a complete Standard MIDI File held in memory.

	Parameters:
		data: The whole file contents.

	Returns:
		The decoded file, once every declared track has been processed.

	Raises:
		SmfDecodeError: Any framing, status or meta error. No partial result is
			returned.

	Example:
		```python
		midi_file = smfread.decode_bytes(pathlib.Path("song.mid").read_bytes())
		for track in midi_file.tracks:
			print(track.name, len(track.events))
		```
	"""

	cursor = smfread.byte_cursor.ByteCursor(data)
	midi_file = smfread.events.DecodedFile()

	_header_id = cursor.read_bytes(4)
	_header_length = cursor.read_u32()
	midi_file.format = cursor.read_u16()
	midi_file.track_count = cursor.read_u16()
	midi_file.division = cursor.read_u16()

	logger.debug(
		f"Header: format {midi_file.format}, {midi_file.track_count} track(s), division {midi_file.division}"
	)

	for index in range(midi_file.track_count):
		_track_id = cursor.read_bytes(4)
		_track_length = cursor.read_u32()

		track = smfread.track.decode_track(cursor, midi_file)
		midi_file.tracks.append(track)

		logger.debug(
			f"Track {index}: '{track.name}', {len(track.events)} event(s), end of track: {track.end_of_track}"
		)

	return midi_file


def decode_file (path: typing.Union[str, os.PathLike]) -> smfread.events.DecodedFile:

	"""
	Read a file into memory and decode it.

	Raises:
		IoFailureError: The file cannot be opened or read.
		SmfDecodeError: The contents are malformed.
	"""

	try:
		with open(path, "rb") as f:
			data = f.read()

	except OSError as e:
		raise smfread.exceptions.IoFailureError(f"Cannot read MIDI file {os.fspath(path)!r}: {e}") from e

	logger.info(f"Decoding {os.fspath(path)} ({len(data)} bytes)")

	midi_file = decode_bytes(data)

	logger.info(
		f"Decoded {len(midi_file.tracks)} track(s), tempo {midi_file.tempo} us/qn ({midi_file.bpm} BPM), division {midi_file.division}"
	)

	return midi_file
