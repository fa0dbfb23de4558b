"""
Bulletproofs 생성자 집합 (Generator Set)
==========================================

내적 논증의 공개 기저(basis):

  GeneratorSet = {
      g: [g₀, g₁, ..., g_{n-1}]   (v1과 짝을 이루는 G1 점들)
      h: [h₀, h₁, ..., h_{n-1}]   (v2와 짝을 이루는 G1 점들)
      u: 내적 ⟨v1, v2⟩에 곱해지는 G1 점
  }

n은 1 이상의 2의 거듭제곱이어야 한다. 라운드마다 반 길이의 새 집합으로
통째로 교체되며, 기존 집합은 변경되지 않는다.

**생성 방법**:
  SRS와 마찬가지로 seed에서 결정론적으로 스칼라를 유도하여
  G1 생성자에 곱한다. 이 경우 seed를 아는 사람은 점들 사이의
  이산로그 관계를 알게 되므로 바인딩이 깨진다. 교육/테스트용이며,
  실제 시스템에서는 hash-to-curve로 만든 NUMS 점을 사용해야 한다.

사용 예시:
    >>> gens = GeneratorSet.generate(4, seed=42)
    >>> len(gens)  # 4
"""

import hashlib
import secrets

from zkp.bulletproofs.field import FR, G1, ec_mul, CURVE_ORDER
from zkp.bulletproofs.errors import InvalidInputError, LengthMismatchError


def is_power_of_two(n):
    return n >= 1 and (n & (n - 1)) == 0


class GeneratorSet:
    """내적 논증의 생성자 집합.

    속성:
        g: G1 점 튜플 (길이 n)
        h: G1 점 튜플 (길이 n)
        u: G1 점
    """

    def __init__(self, g, h, u):
        g = tuple(g)
        h = tuple(h)
        if len(g) != len(h):
            raise LengthMismatchError(
                f"g와 h의 길이가 다릅니다: {len(g)} != {len(h)}"
            )
        if not is_power_of_two(len(g)):
            raise InvalidInputError(
                f"생성자 길이는 1 이상의 2의 거듭제곱이어야 합니다: {len(g)}"
            )
        self.g = g
        self.h = h
        self.u = u

    def __len__(self):
        return len(self.g)

    def __eq__(self, other):
        if not isinstance(other, GeneratorSet):
            return NotImplemented
        return self.g == other.g and self.h == other.h and self.u == other.u

    def __repr__(self):
        return f"GeneratorSet(n={len(self)})"

    @classmethod
    def generate(cls, n, seed=None):
        """n 길이의 생성자 집합을 만든다.

        Args:
            n: 벡터 길이 (1 이상의 2의 거듭제곱)
            seed: 결정론적 생성을 위한 시드 (교육용).
                  None이면 secrets로 랜덤 스칼라를 사용한다.

        Returns:
            GeneratorSet

        예시:
            >>> a = GeneratorSet.generate(8, seed=1)
            >>> b = GeneratorSet.generate(8, seed=1)
            >>> a == b  # True
        """
        if not is_power_of_two(n):
            raise InvalidInputError(f"n은 1 이상의 2의 거듭제곱이어야 합니다: {n}")

        def scalar(label, i):
            if seed is None:
                return FR(secrets.randbelow(CURVE_ORDER - 1) + 1)
            h = hashlib.sha256(f"{seed}/{label}/{i}".encode()).digest()
            return FR(int.from_bytes(h, "big") % CURVE_ORDER)

        g = [ec_mul(G1, scalar("g", i)) for i in range(n)]
        h = [ec_mul(G1, scalar("h", i)) for i in range(n)]
        u = ec_mul(G1, scalar("u", 0))
        return cls(g, h, u)
