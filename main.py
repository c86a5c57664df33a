"""
PinchPoint - Pinch-gesture pointer control from a webcam

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

logger = logging.getLogger("pinchpoint")

FALLBACK_SCREEN_SIZE = (1920, 1080)


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="PinchPoint - Pinch-gesture pointer control",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show the camera feed with landmarks and gestures instead of the overlay",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log actions instead of moving the mouse or pressing keys",
    )

    parser.add_argument(
        "--no-overlay",
        action="store_true",
        help="Do not draw the cursor overlay",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args()


def setup_logging(level_name: str, verbose: bool):
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def configured_screen_size(config):
    """Screen size from config, or None when it should be detected."""
    if config.screen.width > 0 and config.screen.height > 0:
        return config.screen.width, config.screen.height
    return None


def create_backend(dry_run: bool):
    from actions import DryRunBackend

    if dry_run:
        return DryRunBackend()
    from actions.pyautogui_backend import PyAutoGuiBackend
    return PyAutoGuiBackend()


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks.
    Useful for tuning pinch thresholds. No actions are dispatched.
    """
    import cv2
    from webcam import GestureRecognizer, Gesture
    from webcam.hand_tracker import HandTracker

    screen_size = configured_screen_size(config) or FALLBACK_SCREEN_SIZE
    tracker = HandTracker(config)
    recognizer = GestureRecognizer(config.gestures, screen_size)

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracker")
        return 1

    try:
        while True:
            tracked = tracker.capture()
            if tracked is None:
                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break
                continue

            state = recognizer.update(tracked.landmarks, tracked.timestamp)
            frame = tracker.get_frame_with_landmarks(tracked.landmarks)

            if frame is not None:
                gesture_text = f"Gesture: {state.gesture.name}"
                cv2.putText(
                    frame, gesture_text, (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )

                info_lines = [f"Active: {state.active_channel or '-'}"]
                info_lines += [
                    f"{name}: {dist:.3f}" for name, dist in state.pinch_distances.items()
                ]
                if state.position is not None:
                    info_lines.append(f"Cursor: ({state.position[0]:.0f}, {state.position[1]:.0f})")
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                cv2.imshow("PinchPoint Debug", frame)

            if state.gesture not in (Gesture.NONE, Gesture.SWIPING):
                print(f"[{tracker.frame_count:5d}] {state.gesture.name}")

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_webcam_mode(config, dry_run: bool, show_overlay: bool):
    """Run PinchPoint with the cursor overlay and desktop actions (Multithreaded)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from actions import ActionDispatcher
    from webcam.worker import WebcamWorker

    app = QApplication(sys.argv)

    screen_size = configured_screen_size(config)
    if screen_size is None:
        geo = app.primaryScreen().geometry()
        screen_size = (geo.width(), geo.height())
    logger.info("Screen size: %dx%d", *screen_size)

    overlay = None
    if show_overlay:
        from ui.cursor_overlay import CursorOverlay
        overlay = CursorOverlay(
            cursor_size=config.ui.cursor_size,
            label_timeout_ms=config.ui.label_timeout_ms,
            show_preview=config.ui.show_preview,
        )
        overlay.show()

    dispatcher = ActionDispatcher(create_backend(dry_run), config.actions, screen_size)

    # Setup background worker and thread
    thread = QThread()
    worker = WebcamWorker(config, screen_size)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        logger.info("Cleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        logger.info("Cleanup complete.")

    # Register cleanup for various exit scenarios
    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        logger.info("Received signal %s, shutting down...", signum)
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_worker_error(msg):
        logger.error("Worker error: %s", msg)
        app.quit()

    # Connect signals (Use QueuedConnection to ensure UI updates happen in main thread)
    thread.started.connect(worker.start_process)
    worker.gesture_detected.connect(dispatcher.handle, Qt.QueuedConnection)
    if overlay is not None:
        worker.gesture_detected.connect(overlay.update_state, Qt.QueuedConnection)
        worker.frame_ready.connect(overlay.set_webcam_frame, Qt.QueuedConnection)
    worker.hand_lost.connect(lambda: logger.info("Hand lost"), Qt.QueuedConnection)
    worker.error.connect(handle_worker_error, Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    from webcam import ConfigError, load_config
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 2

    setup_logging(config.logging.level, args.verbose)

    logger.info("PinchPoint starting (debug=%s, dry_run=%s)", args.debug, args.dry_run)

    if args.debug:
        return run_webcam_debug(config)
    return run_webcam_mode(config, dry_run=args.dry_run, show_overlay=not args.no_overlay)


if __name__ == "__main__":
    sys.exit(main())
