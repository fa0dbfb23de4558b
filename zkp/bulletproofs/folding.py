"""
접기 단계 (Folding Step)
=========================

챌린지 x로 벡터와 생성자를 절반 길이로 접는다.

  ┌─────────────────────────────────────────────────────────────┐
  │  v1' = a_L·x   + a_R·x⁻¹        g' = g_L·x⁻¹ + g_R·x        │
  │  v2' = b_L·x⁻¹ + b_R·x          h' = h_L·x   + h_R·x⁻¹      │
  │  u'  = u                                                    │
  └─────────────────────────────────────────────────────────────┘

**왜 이 짝짓기인가?**
  v1과 g는 서로 반대 가중치(x ↔ x⁻¹)로 접히므로
  ⟨v1', g'⟩ = ⟨a_L, g_L⟩ + ⟨a_R, g_R⟩ + x²⟨a_L, g_R⟩ + x⁻²⟨a_R, g_L⟩.
  v2/h, v1/v2 쌍도 같은 모양이 되어, 세 항을 더하면

    P' = P + x²·L + x⁻²·R

  가 성립한다 (L, R은 prover.prove_rec의 교차항 커밋먼트).
  Prover의 벡터 접기와 Verifier의 생성자 접기가 이 짝짓기를
  정확히 공유해야 라운드 검증식이 정직한 증명에서 성립한다.
"""

from zkp.bulletproofs.field import FR, ec_mul, ec_add, inverse
from zkp.bulletproofs.generators import GeneratorSet
from zkp.bulletproofs.errors import LengthMismatchError


def split_half(seq):
    """시퀀스를 앞/뒤 절반으로 나눈다. 길이는 짝수여야 한다."""
    n = len(seq)
    if n % 2 != 0:
        raise LengthMismatchError(f"홀수 길이는 반으로 나눌 수 없습니다: {n}")
    m = n // 2
    return seq[:m], seq[m:]


def fold_vector(v, left, right):
    """[lᵢ·left + rᵢ·right]: 스칼라 벡터 접기."""
    v_l, v_r = split_half(v)
    return [l * left + r * right for l, r in zip(v_l, v_r)]


def fold_point_vector(points, left, right):
    """[left·Lᵢ + right·Rᵢ]: G1 점 벡터 접기."""
    p_l, p_r = split_half(points)
    return [ec_add(ec_mul(l, left), ec_mul(r, right)) for l, r in zip(p_l, p_r)]


def fold_witness(v1, v2, x):
    """두 witness 벡터를 반대 짝짓기로 접는다.

    Returns:
        (v1', v2') = (a_L·x + a_R·x⁻¹, b_L·x⁻¹ + b_R·x)

    Raises:
        DegenerateChallengeError: x = 0
        LengthMismatchError: v1, v2 길이가 다르거나 홀수
    """
    if len(v1) != len(v2):
        raise LengthMismatchError(f"v1과 v2의 길이가 다릅니다: {len(v1)} != {len(v2)}")
    x = FR(int(x))
    x_inv = inverse(x)
    return fold_vector(v1, x, x_inv), fold_vector(v2, x_inv, x)


def fold_generators(generators, x):
    """생성자 집합을 접어 반 길이의 새 GeneratorSet을 만든다. u는 그대로."""
    x = FR(int(x))
    x_inv = inverse(x)
    g = fold_point_vector(generators.g, x_inv, x)
    h = fold_point_vector(generators.h, x, x_inv)
    return GeneratorSet(g, h, generators.u)


def prove_update(challenge, generators, v1, v2):
    """Prover 쪽 한 라운드 갱신: 벡터와 생성자를 함께 접는다.

    Args:
        challenge: Challenge (이번 라운드 챌린지)
        generators: 현재 GeneratorSet
        v1, v2: 현재 witness 벡터

    Returns:
        (GeneratorSet', v1', v2')
    """
    x = challenge.random_challenge
    new_v1, new_v2 = fold_witness(v1, v2, x)
    return fold_generators(generators, x), new_v1, new_v2
