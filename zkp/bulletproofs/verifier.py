"""
Bulletproofs Verifier — 라운드 검증식과 기저 사례
===================================================

**라운드 검증식**:
  P_{i+1} == x_i²·L_i + x_i⁻²·R_i + P_i

  벡터/생성자를 (x, x⁻¹)로 접은 결과의 대수적 귀결이다
  (folding 모듈 설명 참고). 좌변 P_{i+1}은 다음 라운드의
  pedersen_commitment, 마지막 라운드라면 SmallProof의 것이다.

**기저 사례**:
  완전히 접힌 단일 생성자 쌍 (g, h)와 공개된 스칼라로
  g·value1 + h·value2 + u·(value1·value2)를 다시 계산해 비교한다.

검증 실패는 예외가 아니라 False를 반환한다.
"""

from zkp.bulletproofs.field import FR, ec_mul, ec_add, inverse
from zkp.bulletproofs.commitment import combined_commitment
from zkp.bulletproofs.errors import GeneratorCountError


def verify_rec(rec_proof, challenge, next_commitment):
    """라운드 하나의 접기 항등식을 검사한다.

    Args:
        rec_proof: RecursionProof (라운드 i)
        challenge: Challenge (라운드 i의 x)
        next_commitment: P_{i+1}

    Returns:
        bool

    Raises:
        DegenerateChallengeError: x = 0
    """
    x = FR(int(challenge.random_challenge))
    x_inv = inverse(x)

    computed = ec_add(
        ec_add(ec_mul(rec_proof.l_value, x * x),
               ec_mul(rec_proof.r_value, x_inv * x_inv)),
        rec_proof.pedersen_commitment,
    )
    return computed == next_commitment


def verify_small(small_proof, generators):
    """기저 사례 증명을 검증한다.

    Args:
        small_proof: SmallProof
        generators: 완전히 접힌 GeneratorSet (길이 1)

    Returns:
        bool

    Raises:
        GeneratorCountError: 생성자 길이가 1이 아닐 때
    """
    if len(generators.g) != 1 or len(generators.h) != 1:
        raise GeneratorCountError(
            f"기저 사례에는 길이 1의 생성자가 필요합니다: "
            f"g={len(generators.g)}, h={len(generators.h)}"
        )

    # dot_product 필드는 믿지 않고 공개된 두 스칼라로 다시 계산
    dot = small_proof.value1 * small_proof.value2
    if small_proof.dot_product != dot:
        return False

    computed = combined_commitment(
        [small_proof.value1], [small_proof.value2], dot,
        generators.g, generators.h, generators.u,
    )
    return computed == small_proof.pedersen_commitment
