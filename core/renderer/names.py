"""
core/renderer/names.py - Terraform 식별자 이름 생성

표시 이름을 Terraform 선언 이름으로 정규화하고, 한 번의 생성 실행 안에서
중복되지 않는 이름을 발급합니다.

Example:
    tracker = NameTracker()
    tracker.unique("My Compartment")  # "my_compartment"
    tracker.unique("My Compartment")  # "my_compartment_2"
    tracker.unique("Other")           # "other"
"""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def to_tf_name(label: str) -> str:
    """소문자로 바꾸고 영숫자가 아닌 문자를 각각 _로 치환 (연속 문자도 합치지 않음)"""
    return _NON_ALNUM.sub("_", label.lower())


class NameTracker:
    """생성 실행 단위의 이름 발급기

    같은 기본 이름의 두 번째 사용부터 _2, _3 ... 접미사를 붙입니다.
    접미사가 붙은 이름도 예약되므로 이후 "a_2" 같은 라벨이 들어와도
    이미 발급된 이름과 겹치지 않습니다. 단일 스레드에서만 사용합니다.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._issued: set[str] = set()

    def unique(self, label: str) -> str:
        """라벨에 대한 고유 식별자 발급"""
        base = to_tf_name(label)
        count = self._counts.get(base, 0)

        name = base
        while name in self._issued:
            count += 1
            name = f"{base}_{count}" if count > 1 else base
        self._counts[base] = max(count, 1)
        self._issued.add(name)
        return name

    def __contains__(self, name: str) -> bool:
        return name in self._issued

    def __len__(self) -> int:
        return len(self._issued)
