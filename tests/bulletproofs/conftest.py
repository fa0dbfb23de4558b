import sys
import os
import random
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkp.bulletproofs.field import FR, CURVE_ORDER
from zkp.bulletproofs.generators import GeneratorSet
from zkp.bulletproofs.challenge import (
    ConstantChallengeGenerator,
    FiatShamirChallengeGenerator,
)
from zkp.bulletproofs.system import BulletproofSystem


# ── 테스트 상수 ──
V1 = [2, 4, 6, 8]
V2 = [2, 4, 8, 16]
GENERATOR_SEED = 12345


def _random_vectors(size, seed=0):
    rng = random.Random(seed)
    v1 = [FR(rng.randrange(CURVE_ORDER)) for _ in range(size)]
    v2 = [FR(rng.randrange(CURVE_ORDER)) for _ in range(size)]
    return v1, v2


@pytest.fixture(scope="session")
def random_vectors():
    """재현 가능한 랜덤 FR 벡터 쌍을 만드는 함수."""
    return _random_vectors


@pytest.fixture(scope="session")
def v1():
    return [FR(v) for v in V1]


@pytest.fixture(scope="session")
def v2():
    return [FR(v) for v in V2]


@pytest.fixture(scope="session")
def generators_4():
    """길이 4 생성자 집합 (seed 고정)."""
    return GeneratorSet.generate(4, seed=GENERATOR_SEED)


@pytest.fixture(scope="session")
def generators_8():
    """길이 8 생성자 집합 (seed 고정)."""
    return GeneratorSet.generate(8, seed=GENERATOR_SEED)


@pytest.fixture(scope="session")
def constant_system():
    """상수 챌린지 x = 2를 쓰는 시스템."""
    return BulletproofSystem(ConstantChallengeGenerator(2))


@pytest.fixture(scope="session")
def fs_system():
    """Fiat-Shamir 챌린지를 쓰는 시스템."""
    return BulletproofSystem(FiatShamirChallengeGenerator())


@pytest.fixture(scope="session")
def fs_proof_4(fs_system, generators_4, v1, v2):
    """v1, v2 (길이 4)의 Fiat-Shamir 증명."""
    return fs_system.prove(generators_4, v1, v2)
