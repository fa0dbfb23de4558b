"""
Bulletproofs 내적 논증 데모: v1 = [2, 4, 6, 8], v2 = [2, 4, 8, 16]
=====================================================================

이 스크립트는 내적 논증의 전체 흐름을 시연한다.

실행:
    python -m zkp.bulletproofs.example

흐름:
    1. 생성자 집합 생성 (seed 기반)
    2. 첫 라운드 접기 확인 (상수 챌린지 x = 2)
    3. 증명 생성 (Fiat-Shamir, log₂n 라운드 + 기저 사례)
    4. 증명 검증
    5. 조작된 증명 검증 (실패해야 함)
"""

from zkp.bulletproofs.field import FR, G1, ec_add
from zkp.bulletproofs.generators import GeneratorSet
from zkp.bulletproofs.challenge import (
    ConstantChallengeGenerator,
    FiatShamirChallengeGenerator,
)
from zkp.bulletproofs.commitment import dot_product, combined_commitment, vector_commitment
from zkp.bulletproofs.folding import prove_update
from zkp.bulletproofs.proof import Challenge
from zkp.bulletproofs.prover import prove_rec
from zkp.bulletproofs.verifier import verify_rec
from zkp.bulletproofs.system import BulletproofSystem


def main():
    print("=" * 60)
    print("  Bulletproofs Inner-Product Argument Demo")
    print("  v1 = [2, 4, 6, 8], v2 = [2, 4, 8, 16]")
    print("=" * 60)

    v1 = [FR(2), FR(4), FR(6), FR(8)]
    v2 = [FR(2), FR(4), FR(8), FR(16)]

    # ── 1. 생성자 ──
    print("\n[1] 생성자 집합 생성...")
    generators = GeneratorSet.generate(len(v1), seed=12345)
    print(f"    n = {len(generators)}")
    print(f"    ⟨v1, v2⟩ = {int(dot_product(v1, v2))}")

    # ── 2. 첫 라운드 (x = 2) ──
    print("\n[2] 첫 라운드 접기 (x = 2)...")
    rec_proof = prove_rec(generators, v1, v2)
    challenge = Challenge(ConstantChallengeGenerator(2).generate_challenge(rec_proof))
    new_gens, new_v1, new_v2 = prove_update(challenge, generators, v1, v2)
    print(f"    v1' = {[int(v) for v in new_v1]}")
    print(f"    v2' = {[int(v) for v in new_v2]}")
    folded = combined_commitment(new_v1, new_v2, dot_product(new_v1, new_v2),
                                 new_gens.g, new_gens.h, new_gens.u)
    ok = verify_rec(rec_proof, challenge, folded)
    print(f"    P' == x²L + x⁻²R + P → {'✓' if ok else '✗'}")

    # ── 3. 증명 생성 ──
    print("\n[3] 증명 생성 (Fiat-Shamir)...")
    system = BulletproofSystem(FiatShamirChallengeGenerator())
    proof = system.prove(generators, v1, v2)
    for i, (rp, ch) in enumerate(proof.rec_proofs):
        print(f"    Round {i}: ⟨v1,v2⟩ = {int(rp.dot_product)}, "
              f"x = {str(int(ch.random_challenge))[:8]}...")
    print(f"    기저 사례: value1·value2 = dot_product "
          f"({str(int(proof.small_proof.dot_product))[:8]}...)")

    # ── 4. 검증 ──
    print("\n[4] 증명 검증...")
    result = system.verify(proof, generators)
    print(f"    검증 결과: {'성공 ✓' if result else '실패 ✗'}")
    base = vector_commitment(v1, v2, generators.g, generators.h)
    bound = system.verify_commitment(proof, generators, base)
    print(f"    공개 커밋먼트 + 내적 {int(proof.dot_product)} → {'✓' if bound else '✗'}")

    # ── 5. 조작된 증명 ──
    # 첫 라운드의 L에 G1을 더하면 접기 항등식이 깨져야 한다.
    print("\n[5] 조작된 증명으로 검증 (L 변조)...")
    rp, ch = proof.rec_proofs[0]
    fake_round = (rp._replace(l_value=ec_add(rp.l_value, G1)), ch)
    fake_proof = proof._replace(rec_proofs=(fake_round,) + proof.rec_proofs[1:])
    wrong_result = system.verify(fake_proof, generators)
    print(f"    검증 결과: {'성공 ✓' if wrong_result else '실패 ✗ (예상대로 실패)'}")

    print("\n" + "=" * 60)
    if result and bound and not wrong_result:
        print("  데모 완료: 모든 테스트 통과!")
    else:
        print("  데모 완료: 일부 테스트 실패")
    print("=" * 60)

    return result


if __name__ == "__main__":
    main()
