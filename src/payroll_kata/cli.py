"""Payroll Command Line Interface.

Usage:
    payroll-kata run script.txt
    payroll-kata run script.txt --echo --fail-open --dump
    payroll-kata run --repl                 # read commands from stdin
    payroll-kata run queue.json --json
    payroll-kata convert script.txt --to json
    payroll-kata serve --port 3000

Exit status: 0 on success, 1 when a run halts on an error, 2 on usage
errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Iterable, TextIO

from payroll_kata.config import Settings, get_settings
from payroll_kata.errors import ParseError, PayrollError
from payroll_kata.services import (
    AppChronograph,
    ChronographRunner,
    EchoRunner,
    FailOpenRunner,
    JsonCommandSource,
    PaymentService,
    PayrollApp,
    PlainRunner,
    SilentRunner,
    SoftLanding,
    TextCommandSource,
    TransactionDispatcher,
    echo_lines,
    join_lines,
)
from payroll_kata.services.application import Application
from payroll_kata.services.runner import Runner
from payroll_kata.store import MemoryStore

logger = logging.getLogger(__name__)


class PayrollCli:
    """Payroll Command Line Interface."""

    def __init__(
        self,
        settings: Settings | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="payroll-kata",
            description="Run payroll scripts against an in-memory ledger",
        )
        parser.add_argument(
            "--log-level",
            default=None,
            help=f"Logging level (default: {self.settings.log_level})",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # run command
        run = subparsers.add_parser("run", help="Run a script")
        run.add_argument(
            "file",
            nargs="?",
            help="Script file (default: standard input)",
        )
        run.add_argument(
            "-q", "--quiet",
            action="store_true",
            help="Discard responses and keep going after failures",
        )
        run.add_argument(
            "-e", "--echo",
            action="store_true",
            help="Print every response or error and keep going",
        )
        run.add_argument(
            "-c", "--chronograph",
            action="store_true",
            help="Report elapsed time per command and for the whole run",
        )
        run.add_argument(
            "-f", "--fail-open",
            action="store_true",
            help="Log failed commands and continue",
        )
        run.add_argument(
            "-r", "--repl",
            action="store_true",
            help="Interactive mode: echo input, run the prelude first, never halt",
        )
        run.add_argument(
            "--prelude",
            default=None,
            help="Script run before the main input in REPL mode",
        )
        run.add_argument(
            "--json",
            action="store_true",
            help="Input is a JSON command queue",
        )
        run.add_argument(
            "--dump",
            action="store_true",
            help="Print the ledger as JSON after the run",
        )

        # convert command
        convert = subparsers.add_parser(
            "convert",
            help="Convert between script text and a JSON command queue",
        )
        convert.add_argument("file", help="Input file")
        convert.add_argument(
            "--to",
            choices=["json", "script"],
            default="json",
            help="Output format (default: json)",
        )

        # serve command
        serve = subparsers.add_parser("serve", help="Run the HTTP API")
        serve.add_argument("--host", default=self.settings.host)
        serve.add_argument("--port", type=int, default=self.settings.port)

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        level = parsed.log_level or ("DEBUG" if self.settings.debug else self.settings.log_level)
        logging.basicConfig(
            level=level.upper(),
            stream=self.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        if not parsed.command:
            self.parser.print_help(self.stderr)
            return 2

        handlers: dict[str, Callable[[argparse.Namespace], int]] = {
            "run": self._cmd_run,
            "convert": self._cmd_convert,
            "serve": self._cmd_serve,
        }
        return handlers[parsed.command](parsed)

    # -------------------------------------------------------------------------
    # run
    # -------------------------------------------------------------------------

    def _build_runner(self, args: argparse.Namespace) -> Runner:
        runner: Runner
        if args.quiet or self.settings.quiet:
            runner = SilentRunner()
        elif args.echo or args.repl:
            runner = EchoRunner(self.stdout)
        else:
            runner = PlainRunner()

        if args.fail_open or self.settings.fail_open:
            runner = FailOpenRunner(runner)
        if args.chronograph or self.settings.chronograph:
            runner = ChronographRunner(runner, self.stderr)
        return runner

    def _script_lines(self, args: argparse.Namespace, stream: TextIO) -> Iterable[str]:
        if not args.repl:
            return stream

        prelude: list[str] = []
        prelude_path = args.prelude or self.settings.prelude
        if prelude_path:
            with open(prelude_path, encoding="utf-8") as f:
                prelude = f.readlines()
        return join_lines(prelude, echo_lines(stream, self.stdout))

    def _cmd_run(self, args: argparse.Namespace) -> int:
        """Run a script or command queue against a fresh ledger."""
        try:
            stream = open(args.file, encoding="utf-8") if args.file else self.stdin
        except OSError as e:
            print(f"ERROR: {e}", file=self.stderr)
            return 2

        quiet = args.quiet or self.settings.quiet
        store = MemoryStore()
        dispatcher = TransactionDispatcher(
            store, payments=PaymentService(None if quiet else self.stdout)
        )

        try:
            if args.json:
                source = JsonCommandSource(stream.read())
            else:
                source = TextCommandSource(self._script_lines(args, stream))

            app = PayrollApp(source, dispatcher, self._build_runner(args))
            application: Application = app
            if args.chronograph or self.settings.chronograph:
                application = AppChronograph(application, self.stderr)
            if args.repl:
                application = SoftLanding(application, self.stderr)

            try:
                application.run()
            except PayrollError as e:
                print(f"Error: {e}", file=self.stderr)
                return 1
            finally:
                logger.info("%d item(s) processed", app.processed)
        except (OSError, ValueError) as e:
            print(f"ERROR: {e}", file=self.stderr)
            return 1
        finally:
            if stream is not self.stdin:
                stream.close()

        if args.dump:
            from payroll_kata.api.schemas import SnapshotResponse

            snapshot = SnapshotResponse.from_snapshot(store.snapshot())
            print(snapshot.model_dump_json(indent=2), file=self.stdout)
        return 0

    # -------------------------------------------------------------------------
    # convert
    # -------------------------------------------------------------------------

    def _cmd_convert(self, args: argparse.Namespace) -> int:
        """Convert a script to a JSON queue or back."""
        from payroll_kata.commands import dump_commands, load_commands
        from payroll_kata.parser import format_command, parse_script

        try:
            with open(args.file, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            print(f"ERROR: {e}", file=self.stderr)
            return 2

        try:
            if args.to == "json":
                print(dump_commands(parse_script(text), indent=2), file=self.stdout)
            else:
                for command in load_commands(text):
                    print(format_command(command), file=self.stdout)
        except (ParseError, ValueError) as e:
            print(f"ERROR: {e}", file=self.stderr)
            return 1
        return 0

    # -------------------------------------------------------------------------
    # serve
    # -------------------------------------------------------------------------

    def _cmd_serve(self, args: argparse.Namespace) -> int:
        """Serve the HTTP API with uvicorn."""
        import uvicorn

        uvicorn.run(
            "payroll_kata.api.app:app",
            host=args.host,
            port=args.port,
            reload=self.settings.debug,
        )
        return 0


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    cli = PayrollCli()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
