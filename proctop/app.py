from __future__ import annotations

import argparse
from typing import Any

from rich.console import Console
from rich.markup import escape

from .config import MonitorConfig
from .configLoader import DEFAULT_CONFIG_PATH, loadConfig
from .core import SessionEngine
from .errors import TerminalError
from .keyReader import KeyReader
from .metrics import MetricsProvider
from .terminal import terminalSession
from .ui import RichUi

POLL_TIMEOUT_SEC = 0.1


class MonitorApp:
    def __init__(
        self,
        config: MonitorConfig,
        *,
        provider: Any = None,
        ui: RichUi | None = None,
        keyReader: Any = None,
    ) -> None:
        self.config = config
        self.provider = provider or MetricsProvider()
        self.ui = ui or RichUi()
        self.keyReader = keyReader or KeyReader()
        self.engine = SessionEngine(self.config, self.provider)

    def run(self) -> None:
        with terminalSession():
            self.keyReader.start()
            try:
                with self.ui.session():
                    self.engine.runLoop(
                        self.keyReader.pollKey,
                        self.ui.render,
                        pollTimeoutSec=POLL_TIMEOUT_SEC,
                    )
            finally:
                self.keyReader.stop()


def buildArgParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ptop", description="Interactive terminal process monitor.")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"path to the TOML settings file (default: {DEFAULT_CONFIG_PATH})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = buildArgParser().parse_args(argv)
    errConsole = Console(stderr=True)

    config = loadConfig(args.config)

    app: MonitorApp | None = None
    try:
        app = MonitorApp(config)
        app.run()
    except KeyboardInterrupt:
        return 0
    except TerminalError as exc:
        errConsole.print(f"[bold red]error:[/] {escape(str(exc))}", highlight=False)
        return 1
    except Exception as exc:
        if app is not None:
            for line in app.engine.commandLog[-20:]:
                errConsole.print(line, markup=False, highlight=False)
        errConsole.print(f"[bold red]error:[/] {type(exc).__name__}: {escape(str(exc))}", highlight=False)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
