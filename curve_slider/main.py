"""Entry point for the standalone curve slider demo."""
from __future__ import annotations

import argparse
from dataclasses import replace
import logging
import os
from pathlib import Path
import sys

from PyQt5 import QtGui, QtWidgets

from curve_slider.config import config_path, load_slider_style
from curve_slider.ui.curve_slider_widget import CurveSliderWidget


logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    base_dir = os.path.dirname(sys.argv[0])
    log_path = os.path.join(base_dir, "curve_slider_log.txt")

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )


def demo_path() -> QtGui.QPainterPath:
    path = QtGui.QPainterPath()
    path.moveTo(40.0, 260.0)
    path.cubicTo(120.0, 20.0, 220.0, 20.0, 260.0, 150.0)
    path.cubicTo(300.0, 280.0, 400.0, 280.0, 460.0, 40.0)
    return path


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Curve-constrained slider demo.")
    parser.add_argument("--config", type=Path, default=None, help="Style INI file.")
    parser.add_argument("--samples", type=int, default=None, help="Curve sample count.")
    parser.add_argument("--debug", action="store_true", help="Log every position change.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(logging.DEBUG if args.debug else logging.INFO)
    logger.info("Starting curve slider demo")

    ini_path = args.config or config_path(Path(__file__))
    style = load_slider_style(ini_path)
    if args.samples is not None:
        if args.samples < 2:
            raise SystemExit("--samples must be at least 2")
        style = replace(style, sample_count=args.samples)

    app = QtWidgets.QApplication(sys.argv)
    widget = CurveSliderWidget(style=style)
    widget.setWindowTitle("Curve Slider")
    widget.resize(500, 300)
    widget.positionChanged.connect(lambda value: logger.debug("Slider value %.4f", value))
    widget.set_curve_path(demo_path())
    widget.show()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
