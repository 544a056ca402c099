"""
core/renderer - Terraform 산출물 생성

주요 구성 요소:
- TerraformGenerator: Snapshot → *.tf 파일 세트
- GeneratorOptions: 생성 옵션 (Always-Free 모드)
- output_json: Snapshot 원본 JSON 출력
- NameTracker / to_tf_name: 충돌 없는 Terraform 선언 이름
"""

from .generator import GeneratorOptions, TerraformGenerator, output_json
from .names import NameTracker, to_tf_name

__all__ = [
    "TerraformGenerator",
    "GeneratorOptions",
    "output_json",
    "NameTracker",
    "to_tf_name",
]
