"""
tests/core/renderer/test_names.py - Terraform 선언 이름 테스트
"""

import pytest

from core.renderer.names import NameTracker, to_tf_name


class TestToTfName:
    """to_tf_name 테스트"""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("VM.Standard.A1.Flex", "vm_standard_a1_flex"),
            ("Canonical Ubuntu", "canonical_ubuntu"),
            ("Oracle Linux 9", "oracle_linux_9"),
            ("some-dashed-name", "some_dashed_name"),
            ("MixedCase Name", "mixedcase_name"),
            ("multiple   spaces", "multiple___spaces"),
            ("", ""),
        ],
    )
    def test_normalize(self, label, expected):
        """소문자 + 영숫자 외 문자는 각각 _"""
        assert to_tf_name(label) == expected

    def test_non_ascii(self):
        """ASCII 영숫자가 아닌 문자도 치환"""
        assert to_tf_name("개발 환경") == "_____"


class TestNameTracker:
    """NameTracker 테스트"""

    def test_suffixes(self):
        """같은 라벨 반복 시 _2, _3 접미사"""
        tracker = NameTracker()

        assert tracker.unique("MyCompartment") == "mycompartment"
        assert tracker.unique("MyCompartment") == "mycompartment_2"
        assert tracker.unique("MyCompartment") == "mycompartment_3"
        assert tracker.unique("OtherCompartment") == "othercompartment"

    def test_labels_normalizing_to_same_base(self):
        """정규화 결과가 같은 서로 다른 라벨"""
        tracker = NameTracker()

        assert tracker.unique("My Compartment") == "my_compartment"
        assert tracker.unique("My Compartment") == "my_compartment_2"
        assert tracker.unique("Other") == "other"
        assert tracker.unique("my-compartment") == "my_compartment_3"

    def test_suffixed_name_reserved(self):
        """접미사 이름과 같은 라벨이 들어와도 중복 발급하지 않음"""
        tracker = NameTracker()

        first = tracker.unique("a")
        second = tracker.unique("a")
        third = tracker.unique("a_2")

        assert (first, second) == ("a", "a_2")
        assert third not in (first, second)
        assert len({first, second, third}) == 3

    def test_contains_and_len(self):
        """발급 이름 조회"""
        tracker = NameTracker()
        tracker.unique("prod")
        tracker.unique("prod")

        assert "prod" in tracker
        assert "prod_2" in tracker
        assert "dev" not in tracker
        assert len(tracker) == 2

    def test_independent_trackers(self):
        """실행(tracker)마다 독립"""
        assert NameTracker().unique("x") == NameTracker().unique("x") == "x"
