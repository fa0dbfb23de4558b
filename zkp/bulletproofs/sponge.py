"""
SHA-256 해시 스펀지
====================

Fiat-Shamir 챌린지 생성에 사용하는 단순한 듀플렉스(duplex) 스펀지.

**스펀지 구조**:
  - absorb(e): 필드 원소를 32바이트 빅엔디안 워드로 흡수 버퍼에 추가
  - squeeze(k): state ← SHA-256(state ‖ 흡수 버퍼), 결과를 FR로 축소하여
    k번 반복. 매 squeeze는 상태를 갱신하므로 (체이닝)
    같은 스펀지에서 연속으로 뽑은 원소는 서로 다르다.

**고정 공개 파라미터**:
  초기 상태는 도메인 분리 레이블의 해시이다. Prover와 Verifier가
  같은 레이블과 같은 흡수 순서를 사용하면 같은 원소가 나온다.

사용 예시:
    >>> s = HashSponge(b"bulletproofs-ipa")
    >>> s.absorb(FR(7))
    >>> [c] = s.squeeze(1)
"""

import hashlib

from zkp.bulletproofs.field import FR, CURVE_ORDER
from zkp.bulletproofs.errors import InvalidInputError


WORD_SIZE = 32


class HashSponge:
    """SHA-256 기반 듀플렉스 스펀지.

    속성:
        label: 도메인 분리 레이블 (공개 파라미터)
        state: 현재 32바이트 체이닝 상태
        buffer: 아직 squeeze되지 않은 흡수 데이터
    """

    def __init__(self, label=b"bulletproofs-ipa"):
        self.label = bytes(label)
        self.state = hashlib.sha256(self.label).digest()
        self.buffer = bytearray()

    def absorb(self, element):
        """필드 원소(FR, 기저체 FQ) 또는 정수를 흡수한다.

        Raises:
            InvalidInputError: 음수이거나 32바이트를 넘는 정수
        """
        value = int(element)
        if value < 0 or value.bit_length() > 8 * WORD_SIZE:
            raise InvalidInputError(f"32바이트 워드로 표현할 수 없는 값입니다: {value}")
        self.buffer.extend(value.to_bytes(WORD_SIZE, "big"))

    def squeeze(self, count=1):
        """count개의 FR 원소를 뽑아낸다.

        Args:
            count: 뽑을 원소 수

        Returns:
            list[FR]
        """
        out = []
        for _ in range(count):
            digest = hashlib.sha256(self.state + bytes(self.buffer)).digest()
            self.state = digest
            self.buffer = bytearray()
            out.append(FR(int.from_bytes(digest, "big") % CURVE_ORDER))
        return out
