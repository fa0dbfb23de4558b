"""
Bulletproofs 증명 데이터 모델
===============================

  ┌────────────────────────────────────────────────────────────────┐
  │  Proof                                                         │
  │   rec_proofs: [(RecursionProof₀, Challenge₀), ...,             │
  │                (RecursionProof_{k-1}, Challenge_{k-1})]  k=log₂n │
  │   small_proof: SmallProof (길이 1 기저 사례)                   │
  └────────────────────────────────────────────────────────────────┘

모든 컨테이너는 NamedTuple이므로 생성 후 변경할 수 없다.
라운드 i의 검증에는 라운드 i+1의 pedersen_commitment
(마지막 라운드라면 SmallProof의 것)가 목표값으로 필요하다.
"""

from typing import NamedTuple, Optional, Tuple

from py_ecc.fields import bn128_FQ as FQ

from zkp.bulletproofs.field import FR


# G1 아핀 점 또는 무한원점(None)
G1Point = Optional[Tuple[FQ, FQ]]


class RecursionProof(NamedTuple):
    """한 라운드(재귀 단계)의 증명.

    dot_product: 이번 라운드 전체 벡터의 내적 ⟨v1, v2⟩
    pedersen_commitment: P = ⟨v1, g⟩ + ⟨v2, h⟩ + ⟨v1, v2⟩·u
    l_value: L = ⟨a_L, b_R⟩·u + ⟨a_L, g_R⟩ + ⟨b_R, h_L⟩
    r_value: R = ⟨a_R, b_L⟩·u + ⟨a_R, g_L⟩ + ⟨b_L, h_R⟩
    """
    dot_product: FR
    pedersen_commitment: G1Point
    l_value: G1Point
    r_value: G1Point


class Challenge(NamedTuple):
    """RecursionProof 하나에 묶인 0이 아닌 챌린지 x."""
    random_challenge: FR


class SmallProof(NamedTuple):
    """길이 1 기저 사례의 증명.

    벡터가 스칼라 하나로 줄어든 마지막 단계에서만 값을 공개한다.
    pedersen_commitment = g·value1 + h·value2 + u·dot_product
    (g, h는 완전히 접힌 단일 생성자 쌍)
    """
    value1: FR
    value2: FR
    dot_product: FR
    pedersen_commitment: G1Point


class Proof(NamedTuple):
    """전체 내적 논증 증명."""
    rec_proofs: Tuple[Tuple[RecursionProof, Challenge], ...]
    small_proof: SmallProof

    @property
    def num_rounds(self):
        return len(self.rec_proofs)

    @property
    def commitment(self):
        """증명이 여는 최상위 커밋먼트."""
        if self.rec_proofs:
            return self.rec_proofs[0][0].pedersen_commitment
        return self.small_proof.pedersen_commitment

    @property
    def dot_product(self):
        """증명이 주장하는 원래 벡터의 내적.

        공개 커밋먼트와 함께 BulletproofSystem.verify_commitment로
        검증해야 의미가 있다.
        """
        if self.rec_proofs:
            return self.rec_proofs[0][0].dot_product
        return self.small_proof.dot_product

    def next_commitment(self, i):
        """라운드 i를 검증할 때 목표가 되는 다음 커밋먼트 P_{i+1}."""
        if i + 1 == len(self.rec_proofs):
            return self.small_proof.pedersen_commitment
        return self.rec_proofs[i + 1][0].pedersen_commitment
