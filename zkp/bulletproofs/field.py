"""
Bulletproofs 기반 모듈: 스칼라 필드 및 G1 그룹 연산
=====================================================

내적 논증(Inner-Product Argument) 전체에서 사용되는 대수적 도구를 정의한다.
필드/곡선 연산 자체는 py_ecc의 bn128 구현에 위임하고,
이 모듈은 프로토콜이 필요로 하는 얇은 어댑터만 제공한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 벡터 v1, v2의 원소, 내적 값,
  챌린지 x 모두 FR 원소이다.

**G1 그룹**:
  Pedersen 커밋먼트가 사는 그룹. 점은 (FQ, FQ) 아핀 좌표 튜플이며,
  무한원점(항등원)은 None으로 표현한다.

사용 예시:
    >>> from zkp.bulletproofs.field import FR, G1, ec_mul, ec_sum
    >>> P = ec_sum([ec_mul(G1, FR(2)), ec_mul(G1, FR(3))])  # 5·G1
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from zkp.bulletproofs.errors import DegenerateChallengeError, InvalidInputError


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    주의:
        FQ의 나눗셈은 0의 역원을 0으로 돌려준다.
        챌린지의 역원은 반드시 inverse()를 통해 계산해야 한다.
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (스칼라 필드 크기)
CURVE_ORDER = bn128.curve_order


def inverse(x):
    """FR 원소의 역원 x⁻¹을 반환한다.

    Args:
        x: FR 원소 (또는 정수)

    Returns:
        FR: x⁻¹

    Raises:
        DegenerateChallengeError: x == 0 (역원이 존재하지 않음)
    """
    if not isinstance(x, FR):
        x = FR(x)
    if x == FR(0):
        raise DegenerateChallengeError("0은 역원이 없습니다: 챌린지는 0이 아니어야 합니다")
    return FR(1) / x


# ─────────────────────────────────────────────────────────────────────
# G1 그룹 연산
# ─────────────────────────────────────────────────────────────────────

# G1 그룹 생성자 (generator)
G1 = bn128.G1

# 영점 (point at infinity) - 항등원
Z1 = None  # bn128에서 G1의 항등원은 None으로 표현


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 위의 점 (또는 무한원점 None)
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point
    """
    if point is Z1:
        return Z1
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2. 한쪽이 무한원점이면 다른 쪽을 반환한다."""
    if p1 is Z1:
        return p2
    if p2 is Z1:
        return p1
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원 (negation): -point."""
    if point is Z1:
        return Z1
    return bn128.neg(point)


def ec_sum(points):
    """점들의 합 Σ pᵢ. 빈 입력이면 무한원점을 반환한다.

    그룹 덧셈은 결합/교환 법칙을 만족하므로 결과는 합산 순서와 무관하다.
    """
    result = Z1
    for point in points:
        result = ec_add(result, point)
    return result


def to_affine(point):
    """점의 정규 아핀 좌표 (x, y)를 정수 쌍으로 반환한다.

    py_ecc bn128의 G1 점은 이미 아핀 좌표이므로 정수로만 변환한다.
    해싱(Fiat-Shamir)과 직렬화에서 사용된다.

    Returns:
        (int, int) 또는 None (무한원점)
    """
    if point is Z1:
        return None
    x, y = point
    return int(x), int(y)


def from_affine(coords):
    """(x, y) 정수 쌍을 G1 점으로 복원한다. 곡선 위의 점인지 확인한다.

    Raises:
        InvalidInputError: 좌표가 bn128 곡선 위에 있지 않을 때
    """
    if coords is None:
        return Z1
    point = (FQ(int(coords[0])), FQ(int(coords[1])))
    if not bn128.is_on_curve(point, bn128.b):
        raise InvalidInputError(f"bn128 곡선 위의 점이 아닙니다: {coords}")
    return point
