import argparse, sys

from client.controller import PhotoboothController, log
from client.images import SelectedImage
from client.presets import PRESETS
from client.results import Err

def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="python -m client", description="Photobooth: capture or pick a photo and restyle it.")
    p.add_argument("--server", default="http://127.0.0.1:5000", help="photobooth server base URL")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--file", help="image file to use")
    src.add_argument("--camera", action="store_true", help="capture from the default camera after a countdown")
    p.add_argument("--countdown", type=int, default=5, help="seconds before the camera capture")
    style = p.add_mutually_exclusive_group()
    style.add_argument("--preset", type=int, default=0, choices=range(len(PRESETS)),
                       help="; ".join(f"{i}={pr.label}" for i, pr in enumerate(PRESETS)))
    style.add_argument("--instruction", help="free-text edit instruction")
    p.add_argument("--save-only", action="store_true", help="only store the photo on the server")
    p.add_argument("--out", default="photobooth-result.png", help="where to write the result")
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    with PhotoboothController(args.server) as ctl:
        if args.file:
            ctl.select_image(SelectedImage.from_path(args.file))
        else:
            if not ctl.enable_camera():
                log(f"[client] {ctl.camera_error}")
                return 1
            countdown = ctl.run_countdown(args.countdown, on_tick=lambda n: log(f"[client] {n}…"))
            if countdown is None:
                log(f"[client] {ctl.camera_error}")
                return 1
            countdown.wait()
            ctl.disable_camera()
            if ctl.selected is None:
                log(f"[client] {ctl.camera_error or 'Capture failed.'}")
                return 1

        log(f"[client] INPUT: {ctl.selected.name} ({ctl.selected.size_label})")
        if args.instruction is not None:
            ctl.instruction = args.instruction
        else:
            ctl.use_preset(args.preset)

        result = ctl.save_locally() if args.save_only else ctl.edit_with_provider()
        if result is None or isinstance(result, Err):
            log(f"[client] FAILED: {ctl.error}")
            return 1
        if args.save_only:
            log(f"[client] STORED → {ctl.result_url}")
        log(f"[client] SAVED → {ctl.download(args.out)}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
