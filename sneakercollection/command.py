"""Command line script for SneakerCollection."""
import os
import sys
from argparse import ArgumentParser, Namespace, RawTextHelpFormatter
from pathlib import Path
from textwrap import dedent
from typing import Optional, Sequence

import uvicorn

from sneakercollection.config import Config
from sneakercollection.core import SneakerCollectionError
from sneakercollection.logging import get_logger
from sneakercollection.orm import init_db, seed_db
from sneakercollection.utils import Fore, bold, check_mark, error_line, fg

YELLOW, CYAN, WHITE = Fore.YELLOW, Fore.CYAN, Fore.WHITE
WHITE_EX, CYAN_EX = Fore.LIGHTWHITE_EX, Fore.LIGHTCYAN_EX

APP_NAME = "sneakercollection.__main__:app"

logger = get_logger("sneakercollection.command")


class SneakersCommand:
    def __init__(self, path: Optional[Path] = None):
        """Constructor.

        현재 경로의 ``setup.cfg`` 와 ``SNEAKERS_*`` 환경변수에서 설정을 읽습니다.
        """
        self.path = path or Path(os.path.abspath("."))
        self.config = Config.load_from_config(self.path)

    def banner(self, msg, icon=""):
        """배너를 표시합니다."""
        if os.name == "nt":
            icon = ""
        try:
            term_width = os.get_terminal_size().columns
        except OSError:
            term_width = 75
        banner_width = min(75, term_width)
        print("─" * banner_width)
        print(f"{icon} {msg}")
        print("─" * banner_width)

    def info(self):
        """SneakerCollection 앱 설정 정보를 출력합니다."""
        dot = bold("-", YELLOW)
        self.banner(f"{bold('SneakerCollection Information')}", icon="💡")
        print(dot, fg("Title", CYAN), "  :", fg(self.config.title, WHITE_EX))
        print(dot, fg("DB URL", CYAN), " :", fg(self.config.get_db_url(), WHITE_EX))
        print(dot, fg("API URL", CYAN), ":", fg(self.config.get_api_url(), WHITE_EX))
        print(dot, fg("Path", CYAN), "   :", fg(self.path, WHITE_EX))

    def init_db(self, drop=False, seed=False):
        """DB 테이블을 생성합니다.

        --drop 옵션을 주면 기존 테이블을 지우고 다시 만듭니다.
        --seed 옵션을 주면 비어 있는 DB에 샘플 데이터를 추가합니다.
        """
        bullet = check_mark()
        if drop:
            print(f"{bold('WARNING:', YELLOW)} dropping all tables...")
        get_session = init_db(self.config, drop_all=drop)
        logger.info(
            f"{bullet} init {fg('database', CYAN)}... %s",
            bold(self.config.get_db_url(), YELLOW),
        )

        if seed:
            if seed_db(get_session):
                logger.info(f"{bullet} {fg('sample data', CYAN)} added.")
            else:
                logger.info(f"{bullet} {fg('sample data', CYAN)} skipped: not empty.")

    def run(self, app_name: Optional[str] = None, reload=False, banner=True):
        """API 서버를 실행합니다."""
        if banner:
            msg = "".join(
                [
                    bold("Launching: ", CYAN),
                    bold(self.config.title, WHITE),
                ]
            )
            self.banner(msg, icon="🚀")

        uvicorn.run(
            app_name or APP_NAME,
            host=self.config.api_host,
            port=self.config.api_port,
            reload=reload,
        )


class SneakersCommandParser:
    """콘솔 커맨드 명령어 파서.

    실제 작업은 `SneakersCommand` 객체에 위임합니다.
    """

    def __init__(self, cmd: Optional[SneakersCommand] = None):
        """기본 생성자."""
        self.parser = ArgumentParser(
            "sneakers",
            description=f"✨ {bold('SneakerCollection')} : {fg('command line utility', CYAN_EX)}",
        )
        self._subparsers = self.parser.add_subparsers(dest="command")
        self._cmd = cmd or SneakersCommand()

        # init subparsers
        for handler in [
            self._cmd.info,
            self._cmd.init_db,
            self._cmd.run,
        ]:
            command = handler.__name__.replace("_", "-")
            # 핸들러 함수의 주석을 커맨드라인 도움말로 변환하기 위한 작업입니다.
            doc = None
            if handler.__doc__:
                lines = handler.__doc__.splitlines()
                doc = lines[0] + "\n" + dedent("\n".join(lines[1:]))
            parser = self._subparsers.add_parser(
                command,
                description=doc,
                formatter_class=RawTextHelpFormatter,
            )
            if command == "init-db":
                parser.add_argument(
                    "--drop", action="store_true", help="기존 테이블을 지우고 다시 생성"
                )
                parser.add_argument(
                    "--seed", action="store_true", help="샘플 데이터 추가"
                )
            if command == "run":
                parser.add_argument("app_name", metavar="app_name", nargs="?")
                parser.add_argument(
                    "--reload", action="store_true", help="코드 변경시 자동 재시작"
                )

    def parse_args(self, args: Sequence[str]):
        """콘솔 명령어를 해석해서 적절한 작업을 수행합니다."""
        if not args:
            self.parser.print_help()
            return

        ns = self.parser.parse_args(args)
        method_name = ns.command.replace("-", "_")
        try:
            if hasattr(self, method_name):
                # 커맨드 명령어와 동일한 이름의 메소드가 파서 클래스에 있으면
                # 그 메소드를 호출해서 적당한 처리 후 실제 메소드를 호출합니다.
                getattr(self, method_name)(ns)
            else:
                getattr(self._cmd, method_name)()
        except SneakerCollectionError as e:
            print(error_line(e.message), file=sys.stderr)

    def init_db(self, ns: Namespace):
        """`init-db` 명령어 처리."""
        self._cmd.init_db(drop=ns.drop, seed=ns.seed)

    def run(self, ns: Namespace):
        """`run` 명령어 처리."""
        self._cmd.run(app_name=ns.app_name, reload=ns.reload)


def console_main():
    try:
        parser = SneakersCommandParser()
    except SneakerCollectionError as e:
        print(error_line(e.message), file=sys.stderr)
        sys.exit(1)
    parser.parse_args(sys.argv[1:])


if __name__ == "__main__":
    console_main()
