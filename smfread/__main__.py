import argparse
import logging
import os
import sys
import typing

import yaml

import smfread.decoder
import smfread.exceptions
import smfread.midi_utils
import smfread.player
import smfread.summary


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "smfread.yaml"


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="smfread", description="Decode a Standard MIDI File and optionally play it.")
	parser.add_argument("path", help="MIDI file (.mid) to decode")
	parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="YAML config file (defaults applied if missing)")
	parser.add_argument("--events", type=int, default=0, metavar="N", help="List up to N events per track")
	parser.add_argument("--play", action="store_true", help="Play the file to a MIDI output")
	parser.add_argument("--device", default=None, help="MIDI output device name (overrides config)")
	parser.add_argument("--channel", type=int, choices=range(16), default=None, metavar="0-15", help="Send all voice messages on this channel (0-15)")
	parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

	return parser


def _checked_channel (value: typing.Any) -> int:

	"""
	Coerce a configured channel to an int between 0 and 15.
	"""

	try:
		channel = int(value)
	except (TypeError, ValueError):
		raise ValueError(f"{value!r} is not a channel number") from None

	if not 0 <= channel <= 15:
		raise ValueError(f"{value!r} is not between 0 and 15")

	return channel


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point: decode, print a summary, optionally play.
	"""

	args = build_parser().parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	config = load_config(args.config)
	playback = config.get('playback', {}) or {}

	try:
		midi_file = smfread.decoder.decode_file(args.path)
	except smfread.exceptions.SmfDecodeError as e:
		logger.error(f"Failed to decode {args.path}: {e}")
		return 1

	print(smfread.summary.format_summary(midi_file))

	if args.events > 0:
		for index, track in enumerate(midi_file.tracks):
			print(f"\nTrack {index}: {track.name or '-'}")
			print(smfread.summary.format_events(track, limit=args.events))

	if not args.play:
		return 0

	device_name = args.device if args.device is not None else playback.get('device_name')
	channel = args.channel if args.channel is not None else playback.get('channel')

	if channel is not None:
		try:
			channel = _checked_channel(channel)
		except ValueError as e:
			logger.error(f"Invalid playback channel: {e}")
			return 1

	_, midi_out = smfread.midi_utils.select_output_device(device_name)

	if midi_out is None:
		return 1

	try:
		player = smfread.player.Player(midi_file, midi_out, channel=channel)
		player.play()
	except KeyboardInterrupt:
		logger.info("Stopping...")
	finally:
		midi_out.close()

	return 0


if __name__ == "__main__":
	sys.exit(main())
