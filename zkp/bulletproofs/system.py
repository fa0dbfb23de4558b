"""
Bulletproofs 시스템 — 재귀 반분 프로토콜 오케스트레이터
=========================================================

내적 논증의 증명 생성과 검증 흐름 전체를 관리한다.

**증명 (위에서 아래로)**:

  ┌─────────────────────────────────────────────────────┐
  │  Active(n)  n > 1                                   │
  │    1. prove_rec → RecursionProof (⟨v1,v2⟩, P, L, R) │
  │    2. challenger → x                                │
  │    3. prove_update: v1, v2, g, h를 x로 반분         │
  │    → Active(n/2) 또는 Terminal                       │
  ├─────────────────────────────────────────────────────┤
  │  Terminal  n == 1                                   │
  │    prove_small → SmallProof                         │
  └─────────────────────────────────────────────────────┘

**검증**:
  라운드를 순서대로 재생하며 챌린지를 다시 유도하고
  P_{i+1} == x²L + x⁻²R + P_i를 확인한다. 라운드를 통과할 때마다
  생성자를 같은 x로 접고, 마지막에
  길이 1로 접힌 생성자로 기저 사례를 검증한다.

재귀 호출 대신 명시적 루프를 사용하므로 스택 사용량은 n과 무관하고,
중간 상태를 하나씩 꺼내 볼 수 있다.

사용 예시:
    >>> system = BulletproofSystem(FiatShamirChallengeGenerator())
    >>> gens = GeneratorSet.generate(4, seed=42)
    >>> proof = system.prove(gens, [FR(2), FR(4), FR(6), FR(8)],
    ...                      [FR(2), FR(4), FR(8), FR(16)])
    >>> system.verify(proof, gens)  # True
"""

import logging

from zkp.bulletproofs.field import FR, ec_mul, ec_add
from zkp.bulletproofs.generators import is_power_of_two
from zkp.bulletproofs.challenge import FiatShamirChallengeGenerator
from zkp.bulletproofs.folding import fold_generators, prove_update
from zkp.bulletproofs.proof import Challenge, Proof
from zkp.bulletproofs.prover import prove_rec, prove_small
from zkp.bulletproofs.verifier import verify_rec, verify_small
from zkp.bulletproofs.errors import InvalidInputError, LengthMismatchError


logger = logging.getLogger(__name__)


def _as_fr_list(values):
    return [v if isinstance(v, FR) else FR(int(v)) for v in values]


class BulletproofSystem:
    """챌린지 생성기를 고정한 내적 논증 시스템.

    속성:
        challenger: ChallengeGenerator (읽기 전용으로 공유 가능)
    """

    def __init__(self, challenger):
        self.challenger = challenger

    def prove(self, generators, v1, v2):
        """⟨v1, v2⟩에 대한 증명을 생성한다.

        Args:
            generators: GeneratorSet (길이 n)
            v1, v2: FR 리스트 (길이 n, 정수도 허용)

        Returns:
            Proof

        Raises:
            InvalidInputError: 빈 벡터, 2의 거듭제곱이 아닌 길이
            LengthMismatchError: v1, v2, 생성자 길이 불일치
        """
        n = len(v1)
        if n == 0:
            raise InvalidInputError("v1과 v2는 비어 있으면 안 됩니다")
        if n != len(v2):
            raise LengthMismatchError(f"v1과 v2의 길이가 다릅니다: {n} != {len(v2)}")
        if n != len(generators):
            raise LengthMismatchError(f"벡터와 생성자의 길이가 다릅니다: {n} != {len(generators)}")
        if not is_power_of_two(n):
            raise InvalidInputError(f"벡터 길이는 2의 거듭제곱이어야 합니다: {n}")

        v1 = _as_fr_list(v1)
        v2 = _as_fr_list(v2)

        rec_proofs = []
        while len(v1) > 1:
            rec_proof = prove_rec(generators, v1, v2)
            challenge = Challenge(self.challenger.generate_challenge(rec_proof))
            rec_proofs.append((rec_proof, challenge))
            logger.debug("round %d: n=%d, x=%d", len(rec_proofs) - 1, len(v1),
                         int(challenge.random_challenge))

            generators, v1, v2 = prove_update(challenge, generators, v1, v2)

        small_proof = prove_small(v1[0], v2[0], generators.g[0], generators.h[0], generators.u)
        return Proof(rec_proofs=tuple(rec_proofs), small_proof=small_proof)

    def verify(self, proof, generators):
        """증명을 검증한다.

        Args:
            proof: Proof
            generators: 증명 생성에 사용한 원래 GeneratorSet

        Returns:
            bool: 모든 라운드와 기저 사례가 통과하면 True

        Raises:
            InvalidInputError: 라운드 수가 log₂(n)과 다를 때 (증명 형태 오류)
        """
        n = len(generators)
        expected_rounds = n.bit_length() - 1
        if proof.num_rounds != expected_rounds:
            raise InvalidInputError(
                f"라운드 수가 log2(n)과 다릅니다: {proof.num_rounds} != {expected_rounds}"
            )

        current = generators
        for i, (rec_proof, challenge) in enumerate(proof.rec_proofs):
            # 챌린지는 라운드 커밋먼트로부터 다시 유도해야 한다
            if self.challenger.generate_challenge(rec_proof) != challenge.random_challenge:
                logger.info("round %d carries a challenge not derived from its commitments", i)
                return False
            if not verify_rec(rec_proof, challenge, proof.next_commitment(i)):
                logger.info("round %d failed the folding identity", i)
                return False
            current = fold_generators(current, challenge.random_challenge)

        if not verify_small(proof.small_proof, current):
            logger.info("base case commitment mismatch")
            return False
        return True

    def verify_commitment(self, proof, generators, base_commitment):
        """증명이 공개 커밋먼트를 주장한 내적으로 여는지까지 확인한다.

        verify만으로는 proof.dot_product가 어디에도 묶이지 않는다.
        u 항이 없는 공개 커밋먼트 B = ⟨v1, g⟩ + ⟨v2, h⟩에 대해

          P_0 == B + proof.dot_product·u

        를 먼저 확인하면, 나머지 검증이 통과할 때 P_0을 여는 벡터의
        내적이 proof.dot_product임이 보장된다.

        Args:
            proof: Proof
            generators: 원래 GeneratorSet
            base_commitment: B (commitment.vector_commitment 참고)

        Returns:
            bool
        """
        expected = ec_add(base_commitment, ec_mul(generators.u, proof.dot_product))
        if proof.commitment != expected:
            logger.info("proof does not open the given commitment to its claimed dot product")
            return False
        return self.verify(proof, generators)


def prove(generators, v1, v2, challenger=None):
    """기본 Fiat-Shamir 생성기로 증명을 만든다."""
    return BulletproofSystem(challenger or FiatShamirChallengeGenerator()).prove(generators, v1, v2)


def verify(proof, generators, challenger=None):
    """기본 Fiat-Shamir 생성기로 증명을 검증한다."""
    return BulletproofSystem(challenger or FiatShamirChallengeGenerator()).verify(proof, generators)
