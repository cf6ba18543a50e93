"""
Quantum random source.

QuantumEngine puts qubits in superposition, measures them in alternating
bases and returns raw bits. QuantumRandom wraps it as a random.Random, so it
can be injected anywhere the generator or balancer take an `rng`:

    rng = QuantumRandom()
    password = generate_password(rng=rng)

Raw bits from several circuit runs are XOR-combined, then mixed with SHA-256
before they are served.
"""

from __future__ import annotations

import hashlib
import logging
import random

from qiskit import QuantumCircuit, transpile
from qiskit_aer import AerSimulator

from .config import DEFAULT_QUANTUM_CONFIG, QuantumSourceConfig

logger = logging.getLogger(__name__)

BPF = 53        # Number of bits in a float
RECIP_BPF = 2 ** -BPF


def bits_to_bytes(bits: list[int]) -> bytes:
    """
    Pack bits [0,1,1,0,...] into bytes, MSB first.
    A trailing partial byte is padded with zeros.
    """
    pad_len = (8 - (len(bits) % 8)) % 8
    padded = bits + [0] * pad_len

    out = bytearray()
    for i in range(0, len(padded), 8):
        byte = 0
        for bit in padded[i : i + 8]:
            byte = (byte << 1) | bit
        out.append(byte)
    return bytes(out)


def bytes_to_bits(data: bytes) -> list[int]:
    return [(byte >> (7 - i)) & 1 for byte in data for i in range(8)]


def amplify_entropy(bits: list[int], rounds: int = 1) -> list[int]:
    """
    Hash the bits with SHA-256 `rounds` times and return the digest bits.

    rounds <= 0 returns the input unchanged.
    """
    if rounds <= 0:
        return bits

    data = bits_to_bytes(bits)
    for _ in range(rounds):
        data = hashlib.sha256(data).digest()
    return bytes_to_bits(data)


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, config: QuantumSourceConfig | None = None) -> None:
        self.config = config or DEFAULT_QUANTUM_CONFIG
        # Local simulator backend.
        self.backend = AerSimulator()

        if self.config.num_qubits < 1:
            raise ValueError(
                f"num_qubits must be at least 1, got {self.config.num_qubits}."
            )

        # Ensure requested num_qubits does not exceed backend capability.
        max_qubits = getattr(self.backend, "num_qubits", None)
        if max_qubits is not None and self.config.num_qubits > max_qubits:
            raise ValueError(
                f"Configured num_qubits={self.config.num_qubits} exceeds "
                f"backend limit ({max_qubits}). "
                "Lower num_qubits in QuantumSourceConfig."
            )

    def build_circuit(self) -> QuantumCircuit:
        """
        Prepare N qubits with H, then measure even indices in the Z basis
        and odd indices in the X basis (an extra H before measuring).
        """
        n = self.config.num_qubits
        qc = QuantumCircuit(n, n)

        for i in range(n):
            qc.h(i)

        for i in range(n):
            if i % 2 == 1:
                qc.h(i)
            qc.measure(i, i)

        return qc

    def measure(self) -> list[int]:
        """Run the circuit once (single shot) and return one bit per qubit."""
        qc = self.build_circuit()
        tqc = transpile(qc, self.backend)
        result = self.backend.run(tqc, shots=1).result()
        counts = result.get_counts()

        # counts is a dict like {'0101...': 1}; qiskit orders bits as
        # [q_(n-1) ... q_0], so reverse to make index 0 the first qubit.
        bitstring = next(iter(counts))[::-1]
        return [int(b) for b in bitstring]


class QuantumRandom(random.Random):
    """
    random.Random backed by QuantumEngine measurements.

    Like random.SystemRandom, it cannot be seeded and has no state to save or
    restore.
    """

    # Keyword-only: random.Random's constructor treats a positional
    # argument as a seed.
    def __init__(
        self,
        *,
        config: QuantumSourceConfig | None = None,
        engine: QuantumEngine | None = None,
    ) -> None:
        self.config = config or DEFAULT_QUANTUM_CONFIG
        self.engine = engine or QuantumEngine(self.config)
        self._pool: list[int] = []
        self.refills = 0
        super().__init__()

    def _refill(self) -> None:
        combined: list[int] | None = None
        for _ in range(max(1, self.config.quantum_streams)):
            bits = self.engine.measure()
            if combined is None:
                combined = bits[:]
            elif len(bits) != len(combined):
                raise ValueError(
                    "Quantum streams produced different bit-lengths; "
                    "this should not happen."
                )
            else:
                combined = [b ^ c for b, c in zip(bits, combined)]

        assert combined is not None
        fresh = amplify_entropy(combined, self.config.entropy_rounds)
        if not fresh:
            raise ValueError("Quantum engine returned no bits.")
        self._pool.extend(fresh)
        self.refills += 1
        logger.debug("Quantum refill #%d added %d bits", self.refills, len(fresh))

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        while len(self._pool) < k:
            self._refill()

        value = 0
        for bit in self._pool[:k]:
            value = (value << 1) | bit
        del self._pool[:k]
        return value

    def random(self) -> float:
        return self.getrandbits(BPF) * RECIP_BPF

    def seed(self, *args, **kwds) -> None:
        return None

    def _notimplemented(self, *args, **kwds):
        raise NotImplementedError("Quantum entropy source does not have state.")

    getstate = setstate = _notimplemented
