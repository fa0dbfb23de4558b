"""
챌린지 생성기 (Challenge Generator)
=====================================

라운드 증명(RecursionProof)으로부터 챌린지 x를 만든다.
두 가지 구현을 제공하며, 사용할 구현은 BulletproofSystem 생성 시 선택한다.

**ConstantChallengeGenerator** (테스트 전용):
  항상 같은 상수를 반환한다. Prover가 챌린지를 미리 알고 벡터를
  고를 수 있으므로 실제 시스템에서는 안전하지 않다.

**FiatShamirChallengeGenerator**:
  pedersen_commitment, l_value, r_value의 아핀 좌표를 이 순서로
  해시 스펀지에 흡수한 뒤 필드 원소 하나를 뽑는다.
  챌린지가 이번 라운드의 커밋먼트에 묶이므로
  상호작용 없이 Verifier의 무작위성을 시뮬레이션한다.

사용 예시:
    >>> challenger = FiatShamirChallengeGenerator()
    >>> x = challenger.generate_challenge(rec_proof)
"""

from zkp.bulletproofs.field import FR, to_affine
from zkp.bulletproofs.sponge import HashSponge
from zkp.bulletproofs.errors import DegenerateChallengeError


DEFAULT_LABEL = b"bulletproofs-ipa"


class ChallengeGenerator:
    """챌린지 생성기 인터페이스."""

    def generate_challenge(self, rec_proof):
        """RecursionProof → FR 챌린지."""
        raise NotImplementedError


class ConstantChallengeGenerator(ChallengeGenerator):
    """항상 같은 챌린지를 돌려주는 테스트용 생성기."""

    def __init__(self, constant):
        constant = FR(int(constant))
        if constant == FR(0):
            raise DegenerateChallengeError("상수 챌린지는 0이 아니어야 합니다")
        self.constant = constant

    def generate_challenge(self, rec_proof):
        return self.constant

    def __repr__(self):
        return f"ConstantChallengeGenerator({int(self.constant)})"


class FiatShamirChallengeGenerator(ChallengeGenerator):
    """해시 스펀지 기반 Fiat-Shamir 챌린지 생성기.

    고정된 레이블만 가지므로 여러 세션에서 읽기 전용으로 공유해도 안전하다.
    매 호출마다 새 스펀지를 만든다.
    """

    def __init__(self, label=DEFAULT_LABEL):
        self.label = bytes(label)

    def generate_challenge(self, rec_proof):
        sponge = HashSponge(self.label)
        for point in (rec_proof.pedersen_commitment,
                      rec_proof.l_value,
                      rec_proof.r_value):
            coords = to_affine(point)
            # 무한원점은 (0, 0)으로 흡수
            x, y = coords if coords is not None else (0, 0)
            sponge.absorb(x)
            sponge.absorb(y)

        challenge = sponge.squeeze(1)[0]
        while challenge == FR(0):
            challenge = sponge.squeeze(1)[0]
        return challenge

    def __repr__(self):
        return f"FiatShamirChallengeGenerator({self.label!r})"
