"""
Quantum engine: builds a circuit, puts qubits in superposition,
measures them in alternating bases, and returns raw bitstrings.

QuantumRandomSource wraps the engine as a RandomSource so the generator
can draw characters from quantum-seeded bytes instead of the OS CSPRNG.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Callable, List, Optional

from qiskit import QuantumCircuit, transpile
from qiskit_aer import AerSimulator

from .entropy import amplify_entropy
from .random_source import ByteStreamRandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuantumSourceConfig:
    # Number of qubits to prepare in superposition; one raw bit each.
    # NOTE: Keep this <= backend limit (often 20-29 for local simulators).
    num_qubits: int = 20

    # Independent circuit runs XOR-combined into one block.
    quantum_streams: int = 2

    # SHA-256 passes applied to every block.
    entropy_rounds: int = 2

    def __post_init__(self) -> None:
        if self.num_qubits < 1:
            raise ValueError(f"num_qubits must be >= 1, got {self.num_qubits}")
        if self.quantum_streams < 1:
            raise ValueError(
                f"quantum_streams must be >= 1, got {self.quantum_streams}"
            )
        if self.entropy_rounds < 1:
            raise ValueError(
                f"entropy_rounds must be >= 1, got {self.entropy_rounds}"
            )


DEFAULT_QUANTUM_CONFIG = QuantumSourceConfig()


def _backend_qubit_limit(backend) -> Optional[int]:
    configuration = getattr(backend, "configuration", None)
    if not callable(configuration):
        return None
    backend_cfg = configuration()
    return getattr(backend_cfg, "n_qubits", None) or getattr(
        backend_cfg, "num_qubits", None
    )


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, config: QuantumSourceConfig | None = None) -> None:
        self.config = config or DEFAULT_QUANTUM_CONFIG
        # Local simulator backend.
        self.backend = AerSimulator()

        self.last_measurement_basis: list[str] | None = None

        max_qubits = _backend_qubit_limit(self.backend)
        if max_qubits is not None and self.config.num_qubits > max_qubits:
            raise ValueError(
                f"Configured num_qubits={self.config.num_qubits} exceeds "
                f"backend limit ({max_qubits}). "
                "Lower num_qubits in QuantumSourceConfig."
            )

    def build_circuit(self) -> tuple[QuantumCircuit, list[str]]:
        """
        Prepare N qubits, put them in superposition, then measure
        in alternating bases (Z, X, Z, X, ...).
        """
        n = self.config.num_qubits
        measurement_basis: list[str] = []

        qc = QuantumCircuit(n, n)

        for i in range(n):
            qc.h(i)

        # Odd indices get a second H, i.e. an X-basis measurement.
        for i in range(n):
            if i % 2 == 1:
                measurement_basis.append("X")
                qc.h(i)
            else:
                measurement_basis.append("Z")
            qc.measure(i, i)

        return qc, measurement_basis

    def get_raw_bits(self) -> List[int]:
        """
        Run the circuit once (a single shot) and return one bit per qubit.
        """
        qc, measurement_basis = self.build_circuit()
        tqc = transpile(qc, self.backend)

        result = self.backend.run(tqc, shots=1).result()
        counts = result.get_counts()

        # counts is a dict like {'0101...': 1}
        bitstring = next(iter(counts.keys()))

        # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
        bitstring = bitstring[::-1]

        self.last_measurement_basis = measurement_basis
        return [int(b) for b in bitstring]


class QuantumRandomSource(ByteStreamRandomSource):
    """
    RandomSource fed by simulated qubit measurements.

    Every refill XOR-combines `quantum_streams` engine runs, then hashes
    them together with 32 bytes from the OS CSPRNG, so a block is never
    weaker than the classical source alone.
    """

    def __init__(
        self,
        config: QuantumSourceConfig | None = None,
        engine_factory: Callable[[QuantumSourceConfig], QuantumEngine] | None = None,
    ) -> None:
        super().__init__()
        self.config = config or DEFAULT_QUANTUM_CONFIG
        factory = engine_factory or QuantumEngine
        self.engine = factory(self.config)

    def _sample_bits(self) -> List[int]:
        combined: List[int] | None = None
        for _ in range(self.config.quantum_streams):
            bits = self.engine.get_raw_bits()
            if combined is None:
                combined = bits[:]
                continue
            if len(bits) != len(combined):
                raise ValueError(
                    "Quantum streams produced different bit-lengths; "
                    "this should not happen."
                )
            combined = [b ^ c for b, c in zip(bits, combined)]

        assert combined is not None
        return combined

    def _refill(self) -> bytes:
        bits = self._sample_bits()
        block = amplify_entropy(
            bits, self.config.entropy_rounds, salt=secrets.token_bytes(32)
        )
        logger.debug(
            "quantum refill #%d: %d qubits x %d streams -> %d bytes",
            self.refills + 1,
            self.config.num_qubits,
            self.config.quantum_streams,
            len(block),
        )
        return block
