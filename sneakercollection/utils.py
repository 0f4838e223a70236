"""콘솔 출력 헬퍼."""
import os

from colorama import init as init_colors

init_colors()  # For Windows environment

from colorama import Fore, Style  # noqa: E402


def fg(text, color=Fore.WHITE):
    """텍스트를 지정된 ANSI 컬러로 출력합니다."""
    return f"{color}{text}{Fore.RESET}"


def bold(text, color=Fore.WHITE):
    """텍스트를 지정된 ANSI 컬러와 밝기 효과를 주어 출력합니다."""
    return f"{Style.BRIGHT}{color}{text}{Style.RESET_ALL}"


def check_mark(color=Fore.GREEN):
    """완료 표시. Windows 콘솔에서는 ``v`` 로 대체합니다."""
    return bold("✓" if os.name != "nt" else "v", color)


def error_line(message: str) -> str:
    """``ERROR: <message>`` 형식의 에러 메세지."""
    return f"{bold('ERROR:', Fore.RED)} {fg(message, Fore.YELLOW)}"
