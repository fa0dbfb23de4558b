"""
Bulletproofs Prover — 재귀 라운드와 기저 사례
===============================================

  ┌─────────────────────────────────────────────────────────────┐
  │  prove_rec (길이 n > 1)                                     │
  │  Prover → Verifier: ⟨v1,v2⟩, P, L, R                        │
  │                                                             │
  │  a = v1, b = v2를 m = n/2에서 나눈다:                        │
  │    L = ⟨a_L, b_R⟩·u + ⟨a_L, g_R⟩ + ⟨b_R, h_L⟩                │
  │    R = ⟨a_R, b_L⟩·u + ⟨a_R, g_L⟩ + ⟨b_L, h_R⟩                │
  │    P = ⟨a, g⟩ + ⟨b, h⟩ + ⟨a, b⟩·u                            │
  ├─────────────────────────────────────────────────────────────┤
  │  prove_small (길이 1)                                       │
  │  Prover → Verifier: x1, x2, x1·x2, g·x1 + h·x2 + u·(x1·x2)   │
  └─────────────────────────────────────────────────────────────┘

챌린지 요청과 접기는 system.BulletproofSystem.prove가 담당한다.
"""

from zkp.bulletproofs.commitment import (
    dot_product,
    combined_commitment,
    intermediate_commitment,
)
from zkp.bulletproofs.folding import split_half
from zkp.bulletproofs.proof import RecursionProof, SmallProof
from zkp.bulletproofs.errors import InvalidInputError, LengthMismatchError


def prove_rec(generators, v1, v2):
    """한 라운드의 RecursionProof를 만든다.

    Args:
        generators: 현재 GeneratorSet (길이 n)
        v1, v2: 현재 witness 벡터 (길이 n)

    Returns:
        RecursionProof

    Raises:
        LengthMismatchError: v1, v2, 생성자의 길이가 서로 다를 때
        InvalidInputError: n < 2 (기저 사례는 prove_small 사용)
    """
    n = len(v1)
    if n != len(v2):
        raise LengthMismatchError(f"v1과 v2의 길이가 다릅니다: {n} != {len(v2)}")
    if n != len(generators):
        raise LengthMismatchError(f"벡터와 생성자의 길이가 다릅니다: {n} != {len(generators)}")
    if n < 2:
        raise InvalidInputError(f"재귀 라운드는 길이 2 이상이 필요합니다: {n}")

    a_l, a_r = split_half(v1)
    b_l, b_r = split_half(v2)
    g_l, g_r = split_half(generators.g)
    h_l, h_r = split_half(generators.h)
    u = generators.u

    # L = ⟨a_L, b_R⟩·u + ⟨a_L, g_R⟩ + ⟨b_R, h_L⟩
    l_value = intermediate_commitment(a_l, b_r, u, g_r, h_l)

    # R = ⟨a_R, b_L⟩·u + ⟨a_R, g_L⟩ + ⟨b_L, h_R⟩
    r_value = intermediate_commitment(a_r, b_l, u, g_l, h_r)

    dot = dot_product(v1, v2)
    pedersen = combined_commitment(v1, v2, dot, generators.g, generators.h, u)

    return RecursionProof(
        dot_product=dot,
        pedersen_commitment=pedersen,
        l_value=l_value,
        r_value=r_value,
    )


def prove_small(x1, x2, g1, h1, u):
    """기저 사례(길이 1)의 SmallProof를 만든다.

    Args:
        x1, x2: 남은 두 스칼라
        g1, h1: 완전히 접힌 단일 생성자 쌍
        u: 내적 생성자
    """
    dot = x1 * x2
    return SmallProof(
        value1=x1,
        value2=x2,
        dot_product=dot,
        pedersen_commitment=combined_commitment([x1], [x2], dot, [g1], [h1], u),
    )
