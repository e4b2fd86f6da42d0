import logging
import typing

import mido


logger = logging.getLogger(__name__)


def select_output_device (device_name: typing.Optional[str] = None) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""
	Select and open a MIDI output device for playback.

	If `device_name` is provided, attempts to open that specific device.
	If `device_name` is None, auto-discovers available devices:
	- If exactly one device exists, it is selected automatically.
	- If multiple devices exist, prompts the user to choose one from the console.
	- If no devices exist, logs an error and returns None.

	Returns:
		A tuple of (device_name, midi_out_object) or (None, None) on failure.
	"""

	try:
		outputs = mido.get_output_names()
		logger.info(f"Available MIDI outputs: {outputs}")

		if not outputs:
			logger.error("No MIDI output devices found.")
			return None, None

		if device_name is not None:

			if device_name not in outputs:
				logger.error(f"MIDI output device '{device_name}' not found. Available devices: {outputs}")
				return None, None

			selected_name = device_name

		elif len(outputs) == 1:
			selected_name = outputs[0]
			logger.info(f"One MIDI output found - using '{selected_name}'")

		else:
			selected_name = _prompt_for_device(outputs)

			if selected_name is None:
				logger.error("No MIDI output device selected.")
				return None, None

		midi_out = mido.open_output(selected_name)
		logger.info(f"Opened MIDI output: {selected_name}")

		return selected_name, midi_out

	except Exception as e:
		logger.error(f"Failed to open MIDI output: {e}")
		return None, None


def _prompt_for_device (outputs: typing.List[str]) -> typing.Optional[str]:

	"""
	Ask on the console which of several outputs to use.

	Returns None if the console closes before a choice is made.
	"""

	print("\nAvailable MIDI output devices:\n")

	for i, name in enumerate(outputs, 1):
		print(f"  {i}. {name}")

	print()

	while True:
		try:
			choice = int(input(f"Select a device (1-{len(outputs)}): "))
			if 1 <= choice <= len(outputs):
				break
		except ValueError:
			pass
		except EOFError:
			print()
			return None

		print(f"Enter a number between 1 and {len(outputs)}.")

	selected_name = outputs[choice - 1]

	print(f"\nTip: To skip this prompt, pass the device name directly:\n")
	print(f"  python -m smfread song.mid --play --device \"{selected_name}\"\n")

	return selected_name
