"""Pitch class and octave helpers for turning decoded keys into playable notes.

Each ``PitchClass`` member's value is its MIDI note number in octave 0, using
the C4 = 60 convention (so C0 = 12 and A0 = 21). Notes below A0, the lowest
key on a standard piano, are rejected.

Example:
	```python
	pitch, octave = PitchClass.from_note_number(69)   # → (PitchClass.A, 4)
	pitch.octave(octave)                              # → 69
	PitchClass.C.octave(0)                            # raises NoteRangeError
	```
"""

import enum
import typing


LOWEST_NOTE = 21


class NoteRangeError (ValueError):

	"""A note falls below the lowest supported note (A0)."""


class PitchClass (enum.IntEnum):

	C = 12
	C_SHARP = 13
	D = 14
	D_SHARP = 15
	E = 16
	F = 17
	F_SHARP = 18
	G = 19
	G_SHARP = 20
	A = 21
	A_SHARP = 22
	B = 23


	def octave (self, octave: int) -> int:

		"""
		Return the MIDI note number of this pitch class in ``octave``.

		Raises:
			NoteRangeError: If the note would be below A0 (21).
		"""

		note = int(self) + 12 * octave

		if note < LOWEST_NOTE:
			raise NoteRangeError(f"Invalid octave: {self.name}{octave} is {note}, can't go lower than {LOWEST_NOTE} (A0)")

		return note


	@classmethod
	def from_note_number (cls, note: int) -> typing.Optional[typing.Tuple["PitchClass", int]]:

		"""
		Split a note number into pitch class and octave, or ``None`` below octave 0.
		"""

		octave = note // 12 - 1

		if octave < 0:
			return None

		return cls(12 + note % 12), octave
