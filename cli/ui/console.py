"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들.
모든 사람용 출력은 stderr로 보내고, stdout은 --json 결과 전용으로 남겨둡니다.
"""

from __future__ import annotations

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.tree import Tree

from core.config import NOISY_LOGGERS


def get_console() -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=True,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()


def setup_logging(debug: bool = False) -> None:
    """루트 logger에 Rich 핸들러 설정

    기본 WARNING, --debug 시 DEBUG. 외부 라이브러리 logger는 WARNING으로 제한합니다.

    Args:
        debug: 디버그 로그 출력 여부
    """
    handler = RichHandler(console=console, rich_tracebacks=debug, show_path=debug)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_progress() -> Progress:
    """Rich Progress 인스턴스를 생성하고 반환합니다."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보

INDENT = "   "  # 하위 항목 들여쓰기 (3칸)


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)"""
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색 정보)"""
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


def print_panel_header(title: str, lines: list[tuple[str, str]] | None = None) -> None:
    """제목과 (라벨, 값) 목록을 포함한 패널 헤더를 출력합니다.

    Args:
        title: 제목
        lines: (라벨, 값) 목록 (선택)
    """
    body = f"[bold blue]{title}[/]"
    if lines:
        width = max(len(label) for label, _ in lines)
        body += "\n" + "\n".join(f"[dim]{label.ljust(width)}[/]  {escape(value)}" for label, value in lines)
    console.print(Panel(body, border_style="blue", padding=(0, 2)))


def print_error_tree(errors: list[tuple[str, list[str]]], title: str = "경고 요약") -> None:
    """에러를 카테고리별 계층 트리로 출력

    Args:
        errors: (category, [detail_items]) 튜플 리스트
        title: 트리 루트 제목

    Example:
        print_error_tree([
            ("vcns", ["list_subnets (prod-vcn): NotAuthorizedOrNotFound"]),
            ("limits", ["list_limit_values (compute): TooManyRequests"]),
        ])
    """
    tree = Tree(f"[bold yellow]{title}[/bold yellow]")
    for category, items in errors:
        branch = tree.add(f"[yellow]{category}[/yellow] ({len(items)}건)")
        for item in items[:3]:
            branch.add(f"[dim]{escape(item)}[/dim]")
        if len(items) > 3:
            branch.add(f"[dim]... 외 {len(items) - 3}건[/dim]")
    console.print(tree)


class DiscoveryProgress:
    """탐색 카테고리 완료 진행 표시 (core.parallel ProgressTracker 구현)

    Example:
        with DiscoveryProgress() as progress:
            discover(ctx, progress_tracker=progress)
    """

    def __init__(self, description: str = "리소스 탐색") -> None:
        self.description = description
        self._progress = get_progress()
        self._task_id = None

    def __enter__(self) -> DiscoveryProgress:
        self._progress.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._progress.stop()

    def set_total(self, total: int) -> None:
        self._task_id = self._progress.add_task(self.description, total=total)

    def on_complete(self, identifier: str, success: bool) -> None:
        if self._task_id is not None:
            self._progress.advance(self._task_id)
        if success:
            self._progress.console.print(f"{INDENT}[green]{SYMBOL_SUCCESS}[/green] {escape(identifier)}")
        else:
            self._progress.console.print(f"{INDENT}[yellow]{SYMBOL_WARNING}[/yellow] {escape(identifier)}")
