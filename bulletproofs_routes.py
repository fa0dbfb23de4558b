"""
Bulletproofs Flask Blueprint — 내적 논증 단계별 실습 엔드포인트
================================================================

3개 페이지: Setup, Proving, Verifying
각 페이지는 DB에 저장된 표시용 정보를 JSON으로 돌려주고,
POST 엔드포인트는 상태를 DB에 저장한 뒤 해당 페이지로 리다이렉트한다.

  Setup     : 생성자 집합 생성 (n, seed)
  Proving   : witness 입력 → 라운드 단위 실행 또는 전체 실행
  Verifying : 증명 검증, 증명 변조(건전성 실습)
"""

from flask import Blueprint, jsonify, redirect, url_for, request
from tinydb import Query

from zkp.bulletproofs.field import FR, G1, ec_add
from zkp.bulletproofs.generators import GeneratorSet
from zkp.bulletproofs.challenge import (
    ConstantChallengeGenerator,
    FiatShamirChallengeGenerator,
)
from zkp.bulletproofs.commitment import dot_product, vector_commitment
from zkp.bulletproofs.folding import prove_update
from zkp.bulletproofs.proof import Challenge
from zkp.bulletproofs.prover import prove_rec, prove_small
from zkp.bulletproofs.system import BulletproofSystem
from zkp.bulletproofs.errors import BulletproofError

from bulletproofs_serializers import (
    serialize_fr_list, deserialize_fr_list,
    serialize_g1, deserialize_g1,
    serialize_generators, deserialize_generators,
    serialize_rec_proof, deserialize_rec_proof,
    serialize_small_proof,
    serialize_proof, deserialize_proof,
    g1_short, fr_short,
)

bulletproofs_bp = Blueprint('bulletproofs', __name__, url_prefix='/bulletproofs')

DATA = Query()

# DB는 app.py에서 주입
DB = None

DEFAULT_V1 = "2,4,6,8"
DEFAULT_V2 = "2,4,8,16"

# py_ecc는 순수 파이썬이므로 요청 하나에서 다룰 생성자 길이를 제한
MAX_GENERATORS = 64


def init_bulletproofs_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove(key):
    """DB에서 키를 삭제한다."""
    DB.remove(DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


# ─── 공용 헬퍼 ───

def _parse_vector(text):
    """'2,4,6,8' → [FR(2), FR(4), FR(6), FR(8)]"""
    return [FR(int(s)) for s in text.split(",") if s.strip()]


def _challenger_config_from_form():
    kind = request.form.get("challenger", "fiat-shamir")
    if kind == "constant":
        return {"kind": "constant", "constant": request.form.get("constant", "2")}
    return {"kind": "fiat-shamir"}


def _build_challenger(config):
    if config and config.get("kind") == "constant":
        return ConstantChallengeGenerator(int(config["constant"]))
    return FiatShamirChallengeGenerator()


def _round_info(index, rec_proof, challenge):
    return {
        "round": index,
        "dot_product": fr_short(rec_proof.dot_product),
        "pedersen_commitment": g1_short(rec_proof.pedersen_commitment),
        "l_value": g1_short(rec_proof.l_value),
        "r_value": g1_short(rec_proof.r_value),
        "challenge": fr_short(challenge.random_challenge),
    }


# ──────────────────────────────────────────────────────────────
# Setup 페이지
# ──────────────────────────────────────────────────────────────

@bulletproofs_bp.route("/setup")
def setup_page():
    """Setup 페이지 정보."""
    return jsonify(setup_info=db_get("bulletproofs.setup.info"),
                   error=db_get("bulletproofs.setup.error"))


@bulletproofs_bp.route("/setup/generators", methods=["POST"])
def setup_generators():
    """생성자 집합을 만든다."""
    db_remove("bulletproofs.setup.error")
    try:
        n = int(request.form.get("n", "4"))
        seed_str = request.form.get("seed", "12345")
        seed = int(seed_str) if seed_str else None
        if n > MAX_GENERATORS:
            raise BulletproofError(f"n은 {MAX_GENERATORS} 이하여야 합니다: {n}")
        generators = GeneratorSet.generate(n, seed=seed)
    except (BulletproofError, ValueError) as e:
        db_set("bulletproofs.setup.error", str(e))
        return redirect(url_for("bulletproofs.setup_page"))

    db_set("bulletproofs.setup.raw", serialize_generators(generators))
    db_set("bulletproofs.setup.info", {
        "n": n,
        "seed": seed,
        "g": [g1_short(p) for p in generators.g],
        "h": [g1_short(p) for p in generators.h],
        "u": g1_short(generators.u),
    })

    # 생성자 변경 시 하위 데이터 클리어
    db_remove_prefix("bulletproofs.prover.")
    db_remove_prefix("bulletproofs.verify.")

    return redirect(url_for("bulletproofs.setup_page"))


@bulletproofs_bp.route("/setup/clear", methods=["POST"])
def setup_clear():
    """모든 Bulletproofs 데이터를 클리어한다."""
    db_remove_prefix("bulletproofs.")
    return redirect(url_for("bulletproofs.setup_page"))


# ──────────────────────────────────────────────────────────────
# Proving 페이지
# ──────────────────────────────────────────────────────────────

@bulletproofs_bp.route("/proving")
def proving_page():
    """Proving 페이지 정보."""
    state = db_get("bulletproofs.prover.state")
    info = None
    if state:
        info = {
            "n": len(state["v1"]),
            "v1": [fr_short(v) for v in deserialize_fr_list(state["v1"])],
            "v2": [fr_short(v) for v in deserialize_fr_list(state["v2"])],
            "challenger": state["challenger"],
            "rounds": [
                _round_info(i, *deserialize_rec_proof(r))
                for i, r in enumerate(state["rounds"])
            ],
            "done": state.get("small") is not None,
        }
    return jsonify(prover_info=info,
                   claimed_dot_product=db_get("bulletproofs.prover.dot_product"),
                   error=db_get("bulletproofs.prover.error"))


@bulletproofs_bp.route("/proving/witness", methods=["POST"])
def proving_witness():
    """witness 벡터와 챌린지 생성기를 설정한다."""
    gens_raw = db_get("bulletproofs.setup.raw")
    if not gens_raw:
        return redirect(url_for("bulletproofs.proving_page"))

    db_remove_prefix("bulletproofs.prover.")
    db_remove_prefix("bulletproofs.verify.")
    try:
        v1 = _parse_vector(request.form.get("v1", DEFAULT_V1))
        v2 = _parse_vector(request.form.get("v2", DEFAULT_V2))
        config = _challenger_config_from_form()
        _build_challenger(config)
        if len(v1) != len(gens_raw["g"]) or len(v2) != len(gens_raw["g"]):
            raise BulletproofError(
                f"벡터 길이가 생성자 길이({len(gens_raw['g'])})와 다릅니다: "
                f"{len(v1)}, {len(v2)}"
            )
    except (BulletproofError, ValueError) as e:
        db_set("bulletproofs.prover.error", str(e))
        return redirect(url_for("bulletproofs.proving_page"))

    db_set("bulletproofs.prover.state", {
        "generators": gens_raw,
        "v1": serialize_fr_list(v1),
        "v2": serialize_fr_list(v2),
        "challenger": config,
        "rounds": [],
        "small": None,
    })
    db_set("bulletproofs.prover.dot_product", fr_short(dot_product(v1, v2)))
    # Verifier에게 공개되는 커밋먼트 (u 항 제외)
    generators = deserialize_generators(gens_raw)
    db_set("bulletproofs.prover.commitment",
           {"base": serialize_g1(vector_commitment(v1, v2, generators.g, generators.h))})
    return redirect(url_for("bulletproofs.proving_page"))


def _step(state):
    """상태를 한 단계 진행한다. 길이 1이면 기저 사례를 만든다."""
    generators = deserialize_generators(state["generators"])
    v1 = deserialize_fr_list(state["v1"])
    v2 = deserialize_fr_list(state["v2"])

    if len(v1) == 1:
        small = prove_small(v1[0], v2[0], generators.g[0], generators.h[0], generators.u)
        state["small"] = serialize_small_proof(small)
        return state

    challenger = _build_challenger(state["challenger"])
    rec_proof = prove_rec(generators, v1, v2)
    challenge = Challenge(challenger.generate_challenge(rec_proof))
    generators, v1, v2 = prove_update(challenge, generators, v1, v2)

    state["rounds"].append(serialize_rec_proof(rec_proof, challenge))
    state["generators"] = serialize_generators(generators)
    state["v1"] = serialize_fr_list(v1)
    state["v2"] = serialize_fr_list(v2)
    return state


def _store_proof_if_done(state):
    if state.get("small") is not None:
        db_set("bulletproofs.prover.proof",
               {"rounds": state["rounds"], "small": state["small"]})


@bulletproofs_bp.route("/proving/round", methods=["POST"])
def proving_round():
    """라운드 하나(또는 기저 사례)를 실행한다."""
    state = db_get("bulletproofs.prover.state")
    if not state or state.get("small") is not None:
        return redirect(url_for("bulletproofs.proving_page"))

    state = _step(state)
    db_set("bulletproofs.prover.state", state)
    _store_proof_if_done(state)
    return redirect(url_for("bulletproofs.proving_page"))


@bulletproofs_bp.route("/proving/run-all", methods=["POST"])
def proving_run_all():
    """남은 라운드와 기저 사례를 모두 실행한다."""
    state = db_get("bulletproofs.prover.state")
    if not state:
        return redirect(url_for("bulletproofs.proving_page"))

    while state.get("small") is None:
        state = _step(state)
    db_set("bulletproofs.prover.state", state)
    _store_proof_if_done(state)
    return redirect(url_for("bulletproofs.proving_page"))


@bulletproofs_bp.route("/proving/clear", methods=["POST"])
def proving_clear():
    """Prover 데이터 + 검증 결과를 클리어한다."""
    db_remove_prefix("bulletproofs.prover.")
    db_remove_prefix("bulletproofs.verify.")
    return redirect(url_for("bulletproofs.proving_page"))


# ──────────────────────────────────────────────────────────────
# Verifying 페이지
# ──────────────────────────────────────────────────────────────

@bulletproofs_bp.route("/verifying")
def verifying_page():
    """Verifying 페이지 정보."""
    return jsonify(verify_result=db_get("bulletproofs.verify.result"),
                   tampered=db_get("bulletproofs.verify.tampered"),
                   error=db_get("bulletproofs.verify.error"))


def _tamper(proof, target):
    """증명의 값 하나를 변조한 새 Proof를 만든다."""
    small = proof.small_proof
    if target == "value1":
        return proof._replace(small_proof=small._replace(value1=small.value1 + FR(1)))
    if target == "value2":
        return proof._replace(small_proof=small._replace(value2=small.value2 + FR(1)))
    if target == "dot_product":
        if not proof.rec_proofs:
            return proof._replace(small_proof=small._replace(dot_product=small.dot_product + FR(1)))
        rec_proof, challenge = proof.rec_proofs[0]
        rec_proof = rec_proof._replace(dot_product=rec_proof.dot_product + FR(1))
        return proof._replace(rec_proofs=((rec_proof, challenge),) + proof.rec_proofs[1:])
    if target not in ("l_value", "r_value", "pedersen_commitment"):
        raise BulletproofError(f"알 수 없는 변조 대상입니다: {target}")
    if target == "pedersen_commitment" and not proof.rec_proofs:
        return proof._replace(small_proof=small._replace(
            pedersen_commitment=ec_add(small.pedersen_commitment, G1)))
    if not proof.rec_proofs:
        raise BulletproofError(f"라운드가 없는 증명에는 {target}가 없습니다")

    rec_proof, challenge = proof.rec_proofs[0]
    rec_proof = rec_proof._replace(**{target: ec_add(getattr(rec_proof, target), G1)})
    return proof._replace(rec_proofs=((rec_proof, challenge),) + proof.rec_proofs[1:])


@bulletproofs_bp.route("/verifying/tamper", methods=["POST"])
def verifying_tamper():
    """저장된 증명을 변조한다 (건전성 실습)."""
    proof_raw = db_get("bulletproofs.prover.proof")
    if not proof_raw:
        return redirect(url_for("bulletproofs.verifying_page"))

    target = request.form.get("target", "l_value")
    try:
        fake = _tamper(deserialize_proof(proof_raw), target)
    except BulletproofError as e:
        db_set("bulletproofs.verify.error", str(e))
        return redirect(url_for("bulletproofs.verifying_page"))

    db_set("bulletproofs.prover.proof", serialize_proof(fake))
    db_set("bulletproofs.verify.tampered", target)
    db_remove("bulletproofs.verify.result")
    return redirect(url_for("bulletproofs.verifying_page"))


@bulletproofs_bp.route("/verifying/verify", methods=["POST"])
def verifying_verify():
    """저장된 증명을 공개 커밋먼트와 원래 생성자로 검증한다.

    증명이 주장하는 내적까지 커밋먼트에 묶여 있는지 verify_commitment로 확인한다.
    """
    proof_raw = db_get("bulletproofs.prover.proof")
    gens_raw = db_get("bulletproofs.setup.raw")
    state = db_get("bulletproofs.prover.state")
    commitment_raw = db_get("bulletproofs.prover.commitment")
    if not proof_raw or not gens_raw or not state or commitment_raw is None:
        return redirect(url_for("bulletproofs.verifying_page"))

    db_remove("bulletproofs.verify.error")
    try:
        proof = deserialize_proof(proof_raw)
        generators = deserialize_generators(gens_raw)
        commitment = deserialize_g1(commitment_raw["base"])
        system = BulletproofSystem(_build_challenger(state["challenger"]))
        result = system.verify_commitment(proof, generators, commitment)
    except BulletproofError as e:
        db_set("bulletproofs.verify.error", str(e))
        return redirect(url_for("bulletproofs.verifying_page"))

    db_set("bulletproofs.verify.result", {
        "result": result,
        "rounds": proof.num_rounds,
        "commitment": g1_short(proof.commitment),
        "dot_product": fr_short(proof.dot_product),
    })
    return redirect(url_for("bulletproofs.verifying_page"))


@bulletproofs_bp.route("/verifying/clear", methods=["POST"])
def verifying_clear():
    """검증 결과를 클리어한다."""
    db_remove_prefix("bulletproofs.verify.")
    return redirect(url_for("bulletproofs.verifying_page"))
