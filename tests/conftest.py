import typing

import mido
import pytest


class FakeMidiOut:

	"""MIDI output stub that remembers what was sent."""

	def __init__ (self) -> None:

		self.sent: typing.List[mido.Message] = []
		self.closed = False
		self.reset_count = 0


	def send (self, message: mido.Message) -> None:

		"""Record an outgoing MIDI message."""

		self.sent.append(message)


	def close (self) -> None:

		self.closed = True


	def reset (self) -> None:

		self.reset_count += 1


# Module-level reference so tests can inspect the most recently opened FakeMidiOut.
_current_fake_output: typing.Optional[FakeMidiOut] = None


def _fake_get_output_names () -> list[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	global _current_fake_output
	fake = FakeMidiOut()
	_current_fake_output = fake
	return fake


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido to use a fake MIDI output for all tests that need it."""

	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)


# ---------------------------------------------------------------------------
# SMF byte builders
# ---------------------------------------------------------------------------

END_OF_TRACK = bytes([0xFF, 0x2F, 0x00])


def vlq (value: int) -> bytes:

	"""Encode a variable-length quantity."""

	groups = [value & 0x7F]
	value >>= 7

	while value:
		groups.append((value & 0x7F) | 0x80)
		value >>= 7

	return bytes(reversed(groups))


def track_chunk (body: bytes) -> bytes:

	"""Wrap an event stream in an MTrk chunk header."""

	return b"MTrk" + len(body).to_bytes(4, "big") + body


def smf (*bodies: bytes, division: int = 96, fmt: int = 1) -> bytes:

	"""Build a complete file from raw track event streams."""

	header = b"MThd" + (6).to_bytes(4, "big") + fmt.to_bytes(2, "big") + len(bodies).to_bytes(2, "big") + division.to_bytes(2, "big")

	return header + b"".join(track_chunk(body) for body in bodies)


def tempo_event (tempo: int, delta: int = 0) -> bytes:

	"""A Set Tempo meta event."""

	return vlq(delta) + bytes([0xFF, 0x51, 0x03]) + tempo.to_bytes(3, "big")


def text_event (meta_type: int, text: bytes, delta: int = 0) -> bytes:

	"""A text-family meta event."""

	return vlq(delta) + bytes([0xFF, meta_type]) + vlq(len(text)) + text
