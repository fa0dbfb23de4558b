"""
Bulletproofs 오류 종류
=======================

구조/계약 위반은 예외로 즉시 드러나고, 검증 실패(건전성 실패)는
예외가 아니라 False 반환값으로 보고된다.

  ┌──────────────────────────────┬──────────────────────────────────┐
  │  예외                         │  발생 조건                        │
  ├──────────────────────────────┼──────────────────────────────────┤
  │  LengthMismatchError          │  벡터/생성자 길이 불일치           │
  │  InvalidInputError            │  빈 입력, 2의 거듭제곱이 아닌 길이 │
  │  GeneratorCountError          │  기저 사례에서 생성자 길이 ≠ 1     │
  │  DegenerateChallengeError     │  역원이 없는 챌린지 (x = 0)        │
  └──────────────────────────────┴──────────────────────────────────┘

모두 ValueError의 하위 클래스이므로 `except ValueError`로도 잡을 수 있다.
"""


class BulletproofError(ValueError):
    """모든 구조/계약 위반 오류의 기반 클래스."""


class LengthMismatchError(BulletproofError):
    """길이가 같아야 하는 두 시퀀스의 길이가 다를 때."""


class InvalidInputError(BulletproofError):
    """입력이 비어 있거나 길이가 2의 거듭제곱이 아닐 때."""


class GeneratorCountError(BulletproofError):
    """기저 사례 검증에 길이 1이 아닌 생성자 집합이 주어졌을 때."""


class DegenerateChallengeError(BulletproofError):
    """챌린지가 역원을 갖지 않을 때 (x = 0)."""
