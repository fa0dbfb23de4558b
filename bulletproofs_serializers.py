"""
Bulletproofs 데이터 직렬화/역직렬화 헬퍼
==========================================

TinyDB에 저장 가능한 형태로 Bulletproofs 객체를 변환한다.
FR, G1, GeneratorSet, RecursionProof, Challenge, SmallProof, Proof.

증명의 논리적 배치:
  rounds: [{dot_product, pedersen_commitment, l_value, r_value, challenge}, ...]
  small:  {value1, value2, dot_product, pedersen_commitment}
"""

from zkp.bulletproofs.field import FR, to_affine, from_affine
from zkp.bulletproofs.generators import GeneratorSet
from zkp.bulletproofs.proof import RecursionProof, Challenge, SmallProof, Proof
from zkp.bulletproofs.errors import InvalidInputError


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [str(int(v)) for v in lst]


def deserialize_fr_list(data):
    """list[str] → list[FR]"""
    return [FR(int(s)) for s in data]


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    coords = to_affine(point)
    if coords is None:
        return None
    return [str(coords[0]), str(coords[1])]


def deserialize_g1(data):
    """[str, str] or None → G1 point (곡선 위의 점인지 확인)"""
    if data is None:
        return None
    return from_affine((int(data[0]), int(data[1])))


# ─── GeneratorSet ───

def serialize_generators(generators):
    """GeneratorSet → dict"""
    return {
        "g": [serialize_g1(p) for p in generators.g],
        "h": [serialize_g1(p) for p in generators.h],
        "u": serialize_g1(generators.u),
    }


def deserialize_generators(data):
    """dict → GeneratorSet"""
    return GeneratorSet(
        [deserialize_g1(p) for p in data["g"]],
        [deserialize_g1(p) for p in data["h"]],
        deserialize_g1(data["u"]),
    )


# ─── RecursionProof / Challenge ───

def serialize_rec_proof(rec_proof, challenge):
    """(RecursionProof, Challenge) → dict"""
    return {
        "dot_product": serialize_fr(rec_proof.dot_product),
        "pedersen_commitment": serialize_g1(rec_proof.pedersen_commitment),
        "l_value": serialize_g1(rec_proof.l_value),
        "r_value": serialize_g1(rec_proof.r_value),
        "challenge": serialize_fr(challenge.random_challenge),
    }


def deserialize_rec_proof(data):
    """dict → (RecursionProof, Challenge)"""
    rec_proof = RecursionProof(
        dot_product=deserialize_fr(data["dot_product"]),
        pedersen_commitment=deserialize_g1(data["pedersen_commitment"]),
        l_value=deserialize_g1(data["l_value"]),
        r_value=deserialize_g1(data["r_value"]),
    )
    return rec_proof, Challenge(deserialize_fr(data["challenge"]))


# ─── SmallProof ───

def serialize_small_proof(small_proof):
    """SmallProof → dict"""
    return {
        "value1": serialize_fr(small_proof.value1),
        "value2": serialize_fr(small_proof.value2),
        "dot_product": serialize_fr(small_proof.dot_product),
        "pedersen_commitment": serialize_g1(small_proof.pedersen_commitment),
    }


def deserialize_small_proof(data):
    """dict → SmallProof"""
    return SmallProof(
        value1=deserialize_fr(data["value1"]),
        value2=deserialize_fr(data["value2"]),
        dot_product=deserialize_fr(data["dot_product"]),
        pedersen_commitment=deserialize_g1(data["pedersen_commitment"]),
    )


# ─── Proof ───

def serialize_proof(proof):
    """Proof → dict"""
    return {
        "rounds": [serialize_rec_proof(rp, ch) for rp, ch in proof.rec_proofs],
        "small": serialize_small_proof(proof.small_proof),
    }


def deserialize_proof(data):
    """dict → Proof

    Raises:
        InvalidInputError: 필수 키가 없을 때
    """
    try:
        rounds = tuple(deserialize_rec_proof(r) for r in data["rounds"])
        small = deserialize_small_proof(data["small"])
    except KeyError as e:
        raise InvalidInputError(f"증명 데이터에 필요한 키가 없습니다: {e}") from e
    return Proof(rec_proofs=rounds, small_proof=small)


# ─── 표시 헬퍼 ───

def _shorten(s, limit=8):
    if len(s) <= limit:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열 (표시용)"""
    coords = to_affine(point)
    if coords is None:
        return "∞"
    return f"({_shorten(str(coords[0]))}, {_shorten(str(coords[1]))})"


def fr_short(val):
    """FR → 축약 문자열 (표시용)"""
    if val is None:
        return "None"
    return _shorten(str(int(val)), limit=10)
