import argparse
import logging
import sys

import cv2
import numpy as np

from blockstack.config import default_option, read_option, write_option
from blockstack.errors import ConfigError
from blockstack.identifier import BlockIdentifier, prepare_frame
from blockstack.segmenter import rasterize
from blockstack.silhouette import extract_silhouette
from blockstack.utils.profile_plot import plot_profiles
from blockstack.utils.sender import send_to_server
from blockstack.utils.stack_image import create_test_image, frame_size, max_stack_rows
from blockstack.utils.trigger import create_trigger
from blockstack.visualizer import BlockVisualizer

logger = logging.getLogger("blockstack")

KEY_ESC = 27


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Identify a stack of toy blocks and send it as robot orders.")
    parser.add_argument("--config", help="option file (JSON); built-in defaults when omitted")
    parser.add_argument("--write-default-config", metavar="PATH",
                        help="write the built-in option file to PATH and exit")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--camera", type=int, default=0, help="camera device index")
    source.add_argument("--image", help="identify a still image instead of the camera")
    source.add_argument("--demo", type=int, metavar="N",
                        help="generate random stacks of up to N blocks instead of the camera")
    parser.add_argument("--raw", action="store_true",
                        help="--image is a raw camera shot that still needs scaling and rotating")
    parser.add_argument("--plot-profiles", metavar="PATH",
                        help="with --image, save the row/column profile plot to PATH")
    parser.add_argument("--host", help="show server address; orders are only sent when given")
    parser.add_argument("--port", type=int, default=80)
    parser.add_argument("--serial", help="serial port of the trigger button (e.g. /dev/ttyUSB0)")
    parser.add_argument("--debug", action="store_true", help="start with all debug images enabled")
    parser.add_argument("--headless", action="store_true", help="no windows")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def send(option, blocks, args):
    if not args.host:
        logger.warning("No --host given, not sending %d blocks", len(blocks))
        return
    send_to_server(option, blocks, args.host, args.port)


def run_image(identifier, visualizer, args):
    frame = cv2.imread(args.image)
    if frame is None:
        print(f"Could not load image {args.image}")
        return 1
    if args.raw:
        frame = prepare_frame(frame, identifier.option.tuning)

    blocks = identifier.process_frame(frame)
    for block in blocks:
        print(block.to_key(), block.rc)

    if args.plot_profiles:
        tuning = identifier.option.tuning
        contour = extract_silhouette(frame, tuning.bin_threshold)
        mask = np.zeros(frame.shape[:2], dtype=np.uint8) if contour is None \
            else rasterize(contour, frame.shape)
        plot_profiles(mask, tuning, save_path=args.plot_profiles)
        print(f"Profiles saved to {args.plot_profiles}")

    if args.host and blocks:
        send(identifier.option, blocks, args)

    visualizer.visualize(frame, blocks)
    if visualizer.show:
        cv2.waitKey()
    return 0


def run_loop(identifier, visualizer, trigger, args):
    rng = np.random.default_rng(0)
    cap = None
    if args.demo is None:
        cap = cv2.VideoCapture(args.camera)
        if not cap.isOpened():
            print("failed to open camera device.")
            return 1
        tuning = identifier.option.tuning
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, tuning.camera_width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, tuning.camera_height)

    demo_frame = None
    if args.demo is not None:
        demo_max = min(args.demo, max_stack_rows(frame_size(identifier.option.tuning)[0],
                                                 identifier.option.tuning))
        if demo_max < args.demo:
            logger.warning("Only %d blocks fit in a frame, --demo capped", demo_max)
    try:
        while True:
            if cap is not None:
                ret, frame = cap.read()
                if not ret:
                    break
                frame = prepare_frame(frame, identifier.option.tuning)
            else:
                if demo_frame is None:
                    demo_frame, _ = create_test_image(
                        1 + int(rng.integers(demo_max)), identifier.option.tuning, rng=rng)
                frame = demo_frame

            blocks = identifier.process_frame(frame)
            visualizer.visualize(frame, blocks)

            if trigger is not None and trigger.poll():
                send(identifier.option, blocks, args)

            key = cv2.waitKey(1 if cap is not None else 30) & 0xFF
            if key == KEY_ESC:
                break
            elif key == ord('m'):
                print("Toggle mode")
                visualizer.toggle_mode()
            elif key == ord('s'):
                send(identifier.option, blocks, args)
            elif key == ord('n'):
                demo_frame = None
    finally:
        if cap is not None:
            cap.release()
        if trigger is not None:
            trigger.close()
        if visualizer.show:
            cv2.destroyAllWindows()
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.write_default_config:
        write_option(args.write_default_config, default_option())
        return 0

    try:
        option = read_option(args.config) if args.config else default_option()
    except (ConfigError, OSError) as e:
        print(f"Bad option file: {e}")
        return 1

    identifier = BlockIdentifier(option, debug_option=args.debug)
    visualizer = BlockVisualizer(identifier, show=not args.headless)

    if args.image:
        return run_image(identifier, visualizer, args)
    return run_loop(identifier, visualizer, create_trigger(args.serial), args)


if __name__ == "__main__":
    sys.exit(main())
