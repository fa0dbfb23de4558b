"""
커밋먼트 산술 (Commitment Arithmetic)
======================================

내적, 다중 스칼라 곱셈(MSM), 그리고 이 둘을 결합한
일반화 Pedersen 커밋먼트:

  P = ⟨v1, g⟩ + ⟨v2, h⟩ + ⟨v1, v2⟩·u

여기서 ⟨x, y⟩는 스칼라끼리면 내적, 스칼라와 점이면 MSM을 뜻한다.
"""

from zkp.bulletproofs.field import FR, ec_mul, ec_add, ec_sum
from zkp.bulletproofs.errors import LengthMismatchError


def _check_lengths(a, b, what):
    if len(a) != len(b):
        raise LengthMismatchError(f"{what} 길이가 다릅니다: {len(a)} != {len(b)}")


def dot_product(a, b):
    """내적 Σ aᵢ·bᵢ.

    예시:
        >>> dot_product([FR(1), FR(2)], [FR(3), FR(4)])  # FR(11)
    """
    _check_lengths(a, b, "내적의 두 벡터")
    result = FR(0)
    for ai, bi in zip(a, b):
        result = result + ai * bi
    return result


def multi_scalar_mul(scalars, points):
    """다중 스칼라 곱셈 Σ sᵢ·Pᵢ."""
    _check_lengths(scalars, points, "스칼라와 점")
    return ec_sum(ec_mul(p, s) for s, p in zip(scalars, points))


def vector_commitment(v1, v2, g, h):
    """u 항이 없는 벡터 커밋먼트 ⟨v1, g⟩ + ⟨v2, h⟩.

    Verifier에게 공개되는 문장(statement)이다. 내적은 증명이 따로 주장하고,
    verify_commitment가 이 값에 dot·u를 더해 최상위 커밋먼트와 비교한다.
    """
    return ec_add(multi_scalar_mul(v1, g), multi_scalar_mul(v2, h))


def combined_commitment(v1, v2, dot, g, h, u):
    """P = ⟨v1, g⟩ + ⟨v2, h⟩ + dot·u."""
    return ec_add(vector_commitment(v1, v2, g, h), ec_mul(u, dot))


def intermediate_commitment(a, b, u, g, h):
    """교차항 커밋먼트 ⟨a, b⟩·u + ⟨a, g⟩ + ⟨b, h⟩.

    라운드의 L, R 값을 계산할 때 사용한다.
    """
    return combined_commitment(a, b, dot_product(a, b), g, h, u)
