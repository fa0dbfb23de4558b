"""
bulletproofs_serializers 테스트: TinyDB 저장 형태 변환과 표시 헬퍼
"""

import json
import pytest

from zkp.bulletproofs.field import FR, G1, ec_mul
from zkp.bulletproofs.generators import GeneratorSet
from zkp.bulletproofs.proof import Challenge
from zkp.bulletproofs.errors import InvalidInputError

from bulletproofs_serializers import (
    serialize_fr, deserialize_fr,
    serialize_fr_list, deserialize_fr_list,
    serialize_g1, deserialize_g1,
    serialize_generators, deserialize_generators,
    serialize_rec_proof, deserialize_rec_proof,
    serialize_proof, deserialize_proof,
    g1_short, fr_short,
)


class TestScalars:
    def test_fr(self):
        assert serialize_fr(FR(42)) == "42"
        assert deserialize_fr("42") == FR(42)

    def test_fr_list(self):
        data = serialize_fr_list([FR(1), FR(2)])
        assert data == ["1", "2"]
        assert deserialize_fr_list(data) == [FR(1), FR(2)]


class TestPoints:
    def test_g1(self):
        P = ec_mul(G1, 123)
        data = serialize_g1(P)
        assert all(isinstance(c, str) for c in data)
        assert deserialize_g1(data) == P

    def test_infinity(self):
        assert serialize_g1(None) is None
        assert deserialize_g1(None) is None

    def test_off_curve_rejected(self):
        x, y = serialize_g1(G1)
        with pytest.raises(InvalidInputError):
            deserialize_g1([x, str(int(y) + 1)])

    def test_generators(self, generators_4):
        data = serialize_generators(generators_4)
        assert len(data["g"]) == 4
        assert deserialize_generators(data) == generators_4


class TestProof:
    def test_rec_proof_keeps_challenge(self, fs_proof_4):
        rec_proof, challenge = fs_proof_4.rec_proofs[0]
        restored, restored_challenge = deserialize_rec_proof(
            serialize_rec_proof(rec_proof, challenge)
        )
        assert restored == rec_proof
        assert restored_challenge == challenge
        assert isinstance(restored_challenge, Challenge)

    def test_proof_survives_json(self, fs_proof_4):
        """TinyDB는 JSON으로 저장하므로 json 왕복 후에도 같아야 한다."""
        data = json.loads(json.dumps(serialize_proof(fs_proof_4)))
        assert deserialize_proof(data) == fs_proof_4

    def test_restored_proof_verifies(self, fs_system, fs_proof_4, generators_4):
        restored = deserialize_proof(serialize_proof(fs_proof_4))
        assert fs_system.verify(restored, generators_4) is True

    def test_layout(self, fs_proof_4):
        data = serialize_proof(fs_proof_4)
        assert len(data["rounds"]) == 2
        assert set(data["rounds"][0]) == {
            "dot_product", "pedersen_commitment", "l_value", "r_value", "challenge",
        }
        assert data["rounds"][0]["dot_product"] == "196"
        assert set(data["small"]) == {"value1", "value2", "dot_product", "pedersen_commitment"}

    def test_missing_key(self, fs_proof_4):
        data = serialize_proof(fs_proof_4)
        del data["small"]
        with pytest.raises(InvalidInputError):
            deserialize_proof(data)

    def test_proof_without_rounds(self, fs_system):
        gens = GeneratorSet.generate(1, seed=1)
        proof = fs_system.prove(gens, [FR(3)], [FR(7)])
        data = serialize_proof(proof)
        assert data["rounds"] == []
        assert deserialize_proof(data) == proof


class TestDisplay:
    def test_fr_short(self):
        assert fr_short(FR(196)) == "196"
        assert fr_short(None) == "None"
        assert fr_short(FR(12345678901234)) == "1234...1234"

    def test_g1_short(self):
        assert g1_short(None) == "∞"
        # G1 = (1, 2)
        assert g1_short(G1) == "(1, 2)"

    def test_g1_short_long_coords(self):
        text = g1_short(ec_mul(G1, 5))
        assert text.startswith("(") and "..." in text
