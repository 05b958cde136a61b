"""
Tests for the quantum engine and the quantum-seeded random source.
"""

import pytest

from spgen.config import DEFAULT_CONFIG
from spgen.generator import generate_one
from spgen.quantum_engine import (
    QuantumEngine,
    QuantumRandomSource,
    QuantumSourceConfig,
)


class FakeEngine:
    """Stands in for the simulator; returns scripted bit lists."""

    def __init__(self, config, bit_lists=None):
        self.config = config
        self._bit_lists = bit_lists
        self.runs = 0

    def get_raw_bits(self):
        self.runs += 1
        if self._bit_lists:
            return self._bit_lists[(self.runs - 1) % len(self._bit_lists)]
        return [(self.runs + i) % 2 for i in range(self.config.num_qubits)]


class TestQuantumSourceConfig:
    def test_defaults(self):
        cfg = QuantumSourceConfig()
        assert (cfg.num_qubits, cfg.quantum_streams, cfg.entropy_rounds) == (20, 2, 2)

    @pytest.mark.parametrize(
        "field", ["num_qubits", "quantum_streams", "entropy_rounds"]
    )
    def test_rejects_non_positive(self, field):
        with pytest.raises(ValueError):
            QuantumSourceConfig(**{field: 0})


class TestQuantumEngine:
    def test_circuit_alternates_bases(self):
        engine = QuantumEngine(QuantumSourceConfig(num_qubits=4))
        qc, basis = engine.build_circuit()
        assert basis == ["Z", "X", "Z", "X"]
        assert qc.num_qubits == 4
        assert qc.num_clbits == 4

    def test_raw_bits_from_simulator(self):
        engine = QuantumEngine(QuantumSourceConfig(num_qubits=6))
        bits = engine.get_raw_bits()
        assert len(bits) == 6
        assert set(bits) <= {0, 1}
        assert engine.last_measurement_basis == ["Z", "X"] * 3


class TestQuantumRandomSource:
    def test_refill_runs_every_stream(self):
        engines = []

        def factory(cfg):
            engine = FakeEngine(cfg)
            engines.append(engine)
            return engine

        source = QuantumRandomSource(QuantumSourceConfig(num_qubits=8, quantum_streams=3), factory)
        value = source.randbelow(256)
        assert 0 <= value < 256
        assert source.refills == 1
        assert engines[0].runs == 3

    def test_mismatched_streams_raise(self):
        cfg = QuantumSourceConfig(num_qubits=4, quantum_streams=2)
        source = QuantumRandomSource(
            cfg, lambda c: FakeEngine(c, bit_lists=[[0, 1, 0, 1], [1, 0]])
        )
        with pytest.raises(ValueError):
            source.randbelow(10)

    def test_same_bits_still_give_fresh_blocks(self):
        # The OS salt keeps blocks distinct even if the qubits repeat.
        cfg = QuantumSourceConfig(num_qubits=4, quantum_streams=1)
        source = QuantumRandomSource(cfg, lambda c: FakeEngine(c, bit_lists=[[1, 0, 1, 0]]))
        first = source._refill()
        second = source._refill()
        assert len(first) == 32
        assert first != second

    def test_drives_the_generator(self):
        source = QuantumRandomSource(
            QuantumSourceConfig(num_qubits=8, quantum_streams=2), FakeEngine
        )
        password = generate_one(DEFAULT_CONFIG, source)
        assert len(password) == 25
        assert len(set(password)) == 25
        assert password[0].isalpha()
