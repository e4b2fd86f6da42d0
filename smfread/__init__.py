"""
smfread - a Standard MIDI File decoder for Python.

Reads an SMF byte stream into typed tracks and events that playback or
analysis code can walk in order.

What it handles:

- **Header and track chunks.** Format, track count and division are read from
  the header; each declared track chunk is decoded in turn.
- **Variable-length quantities.** Delta times and meta/sysex lengths.
- **Running status.** Omitted status bytes are resolved from the previous
  voice status in the same track. Running status never crosses a track
  boundary and is cleared by any system message.
- **Channel voice messages.** Note on/off, polyphonic and channel
  aftertouch, control change, program change and pitch bend.
- **Meta events.** Text family, track and instrument names (copied onto the
  track), end of track, set tempo (the first one sets the file tempo and
  BPM), time and key signatures, SMPTE offset, channel prefix, sequence
  number.
- **Sysex.** 0xF0 and 0xF7 messages, kept as opaque payloads.

Errors that leave the read position untrustworthy (truncated data, unknown
meta types, data bytes with no running status) raise a subclass of
``SmfDecodeError`` and abort the decode. Unsupported system bytes are kept
as inline ``ErrorData`` events instead.

Also included: ``smfread.notes`` (pitch class and octave arithmetic),
``smfread.player`` (timed playback to a mido output port), and a command
line tool (``python -m smfread song.mid``).

Minimal example:

    ```python
    import smfread

    midi_file = smfread.decode_file("song.mid")

    print(midi_file.tempo, midi_file.division)

    for track in midi_file.tracks:
        for event in track.events:
            wait_us = midi_file.delay_microseconds(event.delta_tick)
            print(wait_us, event.status.status_type.name, event.data)
    ```

Package-level exports: ``decode_file``, ``decode_bytes``, ``DecodedFile``,
``Track``, ``Event``, ``SmfDecodeError``.
"""

import smfread.decoder
import smfread.events
import smfread.exceptions


decode_file = smfread.decoder.decode_file
decode_bytes = smfread.decoder.decode_bytes
DecodedFile = smfread.events.DecodedFile
Track = smfread.events.Track
Event = smfread.events.Event
SmfDecodeError = smfread.exceptions.SmfDecodeError
