"""
Recursive round / base case tests
==================================

prove_rec, verify_rec, prove_small, verify_small을 직접 호출하여
라운드 단위 성질을 확인한다.

  접기 항등식: P_{i+1} == x²·L + x⁻²·R + P_i
  기저 사례:   P == g·v1[0] + h·v2[0] + u·(v1[0]·v2[0])
"""

import pytest

from zkp.bulletproofs.field import FR, G1, ec_mul, ec_add, ec_sum
from zkp.bulletproofs.generators import GeneratorSet
from zkp.bulletproofs.challenge import (
    ConstantChallengeGenerator,
    FiatShamirChallengeGenerator,
)
from zkp.bulletproofs.commitment import dot_product, combined_commitment
from zkp.bulletproofs.folding import prove_update
from zkp.bulletproofs.proof import Challenge, SmallProof
from zkp.bulletproofs.prover import prove_rec, prove_small
from zkp.bulletproofs.verifier import verify_rec, verify_small
from zkp.bulletproofs.errors import (
    DegenerateChallengeError,
    GeneratorCountError,
    InvalidInputError,
    LengthMismatchError,
)


def _commit(generators, v1, v2):
    return combined_commitment(v1, v2, dot_product(v1, v2),
                               generators.g, generators.h, generators.u)


# ─────────────────────────────────────────────────────────────────────
# prove_rec
# ─────────────────────────────────────────────────────────────────────

class TestProveRec:
    def test_dot_product(self, generators_4, v1, v2):
        proof = prove_rec(generators_4, v1, v2)
        assert proof.dot_product == FR(196)

    def test_pedersen_commitment(self, generators_4, v1, v2):
        proof = prove_rec(generators_4, v1, v2)
        assert proof.pedersen_commitment == _commit(generators_4, v1, v2)

    def test_l_value(self, generators_4, v1, v2):
        """L = ⟨a_L, b_R⟩·u + ⟨a_L, g_R⟩ + ⟨b_R, h_L⟩"""
        g, h, u = generators_4.g, generators_4.h, generators_4.u
        proof = prove_rec(generators_4, v1, v2)
        # a_L = [2, 4], b_R = [8, 16] → ⟨a_L, b_R⟩ = 80
        expected = ec_sum([
            ec_mul(u, 80),
            ec_mul(g[2], 2), ec_mul(g[3], 4),
            ec_mul(h[0], 8), ec_mul(h[1], 16),
        ])
        assert proof.l_value == expected

    def test_r_value(self, generators_4, v1, v2):
        """R = ⟨a_R, b_L⟩·u + ⟨a_R, g_L⟩ + ⟨b_L, h_R⟩"""
        g, h, u = generators_4.g, generators_4.h, generators_4.u
        proof = prove_rec(generators_4, v1, v2)
        # a_R = [6, 8], b_L = [2, 4] → ⟨a_R, b_L⟩ = 44
        expected = ec_sum([
            ec_mul(u, 44),
            ec_mul(g[0], 6), ec_mul(g[1], 8),
            ec_mul(h[2], 2), ec_mul(h[3], 4),
        ])
        assert proof.r_value == expected

    def test_length_mismatch(self, generators_4, v1, v2):
        with pytest.raises(LengthMismatchError):
            prove_rec(generators_4, v1, v2[:2])

    def test_generator_length_mismatch(self, generators_8, v1, v2):
        with pytest.raises(LengthMismatchError):
            prove_rec(generators_8, v1, v2)

    def test_length_one_rejected(self):
        gens = GeneratorSet.generate(1, seed=1)
        with pytest.raises(InvalidInputError):
            prove_rec(gens, [FR(1)], [FR(2)])

    def test_immutable(self, generators_4, v1, v2):
        proof = prove_rec(generators_4, v1, v2)
        with pytest.raises(AttributeError):
            proof.l_value = None


# ─────────────────────────────────────────────────────────────────────
# verify_rec
# ─────────────────────────────────────────────────────────────────────

class TestVerifyRec:
    def test_one_round_concrete(self, generators_4, v1, v2):
        """n=4, x=2: 접힌 벡터/생성자로 직접 계산한 커밋먼트와 일치."""
        proof = prove_rec(generators_4, v1, v2)
        challenge = Challenge(ConstantChallengeGenerator(2).generate_challenge(proof))
        new_gens, new_v1, new_v2 = prove_update(challenge, generators_4, v1, v2)

        assert new_v1 == [FR(7), FR(12)]
        assert new_v2 == [FR(17), FR(34)]
        assert verify_rec(proof, challenge, _commit(new_gens, new_v1, new_v2))

    def test_matches_next_round_commitment(self, generators_4, v1, v2):
        proof = prove_rec(generators_4, v1, v2)
        challenge = Challenge(FR(2))
        new_gens, new_v1, new_v2 = prove_update(challenge, generators_4, v1, v2)
        next_proof = prove_rec(new_gens, new_v1, new_v2)
        assert verify_rec(proof, challenge, next_proof.pedersen_commitment)

    def test_two_rounds(self, generators_8, random_vectors):
        v1, v2 = random_vectors(8, seed=3)
        challenge = Challenge(FR(2))

        proof_8 = prove_rec(generators_8, v1, v2)
        gens_4, v1_4, v2_4 = prove_update(challenge, generators_8, v1, v2)
        proof_4 = prove_rec(gens_4, v1_4, v2_4)
        assert verify_rec(proof_8, challenge, proof_4.pedersen_commitment)

        gens_2, v1_2, v2_2 = prove_update(challenge, gens_4, v1_4, v2_4)
        proof_2 = prove_rec(gens_2, v1_2, v2_2)
        assert verify_rec(proof_4, challenge, proof_2.pedersen_commitment)

    def test_folding_identity_with_fiat_shamir(self, generators_4, random_vectors):
        """챌린지 생성 방식과 무관하게 항등식이 성립한다."""
        v1, v2 = random_vectors(4, seed=7)
        proof = prove_rec(generators_4, v1, v2)
        challenge = Challenge(FiatShamirChallengeGenerator().generate_challenge(proof))
        new_gens, new_v1, new_v2 = prove_update(challenge, generators_4, v1, v2)
        assert verify_rec(proof, challenge, _commit(new_gens, new_v1, new_v2))

    def test_wrong_next_commitment(self, generators_4, v1, v2):
        proof = prove_rec(generators_4, v1, v2)
        challenge = Challenge(FR(2))
        new_gens, new_v1, new_v2 = prove_update(challenge, generators_4, v1, v2)
        target = ec_add(_commit(new_gens, new_v1, new_v2), G1)
        assert verify_rec(proof, challenge, target) is False

    def test_wrong_challenge(self, generators_4, v1, v2):
        proof = prove_rec(generators_4, v1, v2)
        new_gens, new_v1, new_v2 = prove_update(Challenge(FR(2)), generators_4, v1, v2)
        assert verify_rec(proof, Challenge(FR(3)), _commit(new_gens, new_v1, new_v2)) is False

    def test_zero_challenge_raises(self, generators_4, v1, v2):
        proof = prove_rec(generators_4, v1, v2)
        with pytest.raises(DegenerateChallengeError):
            verify_rec(proof, Challenge(FR(0)), proof.pedersen_commitment)


# ─────────────────────────────────────────────────────────────────────
# prove_small / verify_small
# ─────────────────────────────────────────────────────────────────────

class TestSmallProof:
    def test_prove_small_values(self):
        gens = GeneratorSet.generate(1, seed=5)
        proof = prove_small(FR(3), FR(7), gens.g[0], gens.h[0], gens.u)
        assert proof.value1 == FR(3)
        assert proof.value2 == FR(7)
        assert proof.dot_product == FR(21)

    def test_base_case_commitment(self):
        """P == g·v1[0] + h·v2[0] + u·(v1[0]·v2[0])"""
        gens = GeneratorSet.generate(1, seed=5)
        proof = prove_small(FR(3), FR(7), gens.g[0], gens.h[0], gens.u)
        expected = ec_sum([ec_mul(gens.g[0], 3), ec_mul(gens.h[0], 7), ec_mul(gens.u, 21)])
        assert proof.pedersen_commitment == expected

    def test_verify_small(self):
        gens = GeneratorSet.generate(1, seed=5)
        proof = prove_small(FR(3), FR(7), gens.g[0], gens.h[0], gens.u)
        assert verify_small(proof, gens) is True

    def test_verify_small_wrong_value(self):
        gens = GeneratorSet.generate(1, seed=5)
        proof = prove_small(FR(3), FR(7), gens.g[0], gens.h[0], gens.u)
        assert verify_small(proof._replace(value1=FR(4)), gens) is False

    def test_verify_small_wrong_dot_product(self):
        gens = GeneratorSet.generate(1, seed=5)
        proof = prove_small(FR(3), FR(7), gens.g[0], gens.h[0], gens.u)
        assert verify_small(proof._replace(dot_product=FR(22)), gens) is False

    def test_verify_small_wrong_generators(self):
        gens = GeneratorSet.generate(1, seed=5)
        other = GeneratorSet.generate(1, seed=6)
        proof = prove_small(FR(3), FR(7), gens.g[0], gens.h[0], gens.u)
        assert verify_small(proof, other) is False

    def test_verify_small_requires_single_generator(self, generators_4):
        """길이 2 생성자는 구조 오류 (False가 아님)."""
        gens_2 = GeneratorSet(generators_4.g[:2], generators_4.h[:2], generators_4.u)
        proof = SmallProof(FR(1), FR(1), FR(1), G1)
        with pytest.raises(GeneratorCountError):
            verify_small(proof, gens_2)
