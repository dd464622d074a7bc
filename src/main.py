import argparse
import json
import os
import sys
import traceback

from sergeant.commands import PunishmentManager, parse_commands, residual_text
from sergeant.counting import available_exercises
from sergeant.counting.config_utils import get_allowed_exercises, load_counter_config


def run_extract(args, config) -> int:
    """Print the commands found in a text file (or stdin) and the text left for display."""
    if args.text_file:
        if not os.path.isfile(args.text_file):
            print(f"Text file not found: {args.text_file}")
            return 1
        with open(args.text_file, "r") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    commands = parse_commands(text, get_allowed_exercises(config))
    print(json.dumps([command._asdict() for command in commands], indent=2))
    print(residual_text(text))
    return 0


def run_count(args, config) -> int:
    """Verify a punishment from a camera or a video file."""
    # Imported here so the extract mode works without the vision stack
    from sergeant.feedback import SessionLog
    from sergeant.pose_detection.mediapipe_detector import MediaPipePoseDetector
    from sergeant.session import PunishmentSession

    if args.video and not os.path.isfile(args.video):
        print(f"Video file not found: {args.video}")
        return 1

    if args.voice:
        from sergeant.feedback.voice_feedback import VoiceFeedback
        feedback = VoiceFeedback()
    else:
        feedback = SessionLog("cli")

    manager = PunishmentManager(get_allowed_exercises(config), feedback=feedback)
    punishment = manager.add_punishment(args.exercise, args.count)
    detector = MediaPipePoseDetector()
    try:
        print(f"Initializing session: {punishment.count} x {punishment.title}")
        session = PunishmentSession(manager, punishment.id, detector=detector, config=config)
        source = args.video if args.video else args.camera
        snapshot = session.start(source, display=args.display)
        print(json.dumps(session.summary(), indent=2))
        return 0 if snapshot.is_complete else 2
    finally:
        detector.close()
        feedback.close()


def main(argv=None) -> int:
    """Main entry point for the Sergeant punishment tools."""
    parser = argparse.ArgumentParser(description="Sergeant - punishment extraction and rep verification")
    parser.add_argument('--mode', type=str, choices=['extract', 'count'], default='extract', help='Run mode: extract (default) or count')
    parser.add_argument('--config', type=str, default=None, help='Path to a counter config JSON file')
    parser.add_argument('--text-file', type=str, help='Assistant text to scan (extract mode, default: stdin)')
    parser.add_argument('--exercise', type=str, default='Pushup', choices=available_exercises(), help='Exercise to verify (count mode)')
    parser.add_argument('--count', type=int, default=10, help='Number of repetitions to perform (count mode)')
    parser.add_argument('--video', type=str, help='Path to a video file (count mode, default: camera)')
    parser.add_argument('--camera', type=int, default=0, help='Camera device ID (count mode)')
    parser.add_argument('--display', action='store_true', help='Show the frames with the count overlaid')
    parser.add_argument('--voice', action='store_true', help='Speak the feedback')
    args = parser.parse_args(argv)

    try:
        config = load_counter_config(args.config)
        if args.mode == 'count':
            return run_count(args, config)
        return run_extract(args, config)
    except Exception as e:
        print(f"Error: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
