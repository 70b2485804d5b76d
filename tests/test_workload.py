"""
Tests for the workload module.
"""

import io

from fitsim.io import read_workload
from fitsim.workload import MAX_ARRIVAL, MAX_SERVICE, MAX_SIZE, generate_workload, main


class TestGenerateWorkload:
    """Test cases for generate_workload."""

    def test_count_and_ranges(self):
        """Test that values fall inside the configured ranges."""
        triples = generate_workload(200, seed=3)

        assert len(triples) == 200
        for arrival, size, service in triples:
            assert 0 <= arrival < MAX_ARRIVAL
            assert 1 <= size <= MAX_SIZE
            assert 1 <= service <= MAX_SERVICE

    def test_seed_reproducible(self):
        """Test that a seed reproduces the same workload."""
        assert generate_workload(50, seed=9) == generate_workload(50, seed=9)
        assert generate_workload(50, seed=9) != generate_workload(50, seed=10)

    def test_custom_limits(self):
        """Test custom limits."""
        triples = generate_workload(30, seed=1, max_arrival=1, max_size=1, max_service=1)
        assert set(triples) == {(0, 1, 1)}


class TestMain:
    """Test cases for the fitsim-workload entry point."""

    def test_output_is_readable_workload(self, capsys):
        """Test that the printed workload can be read back."""
        assert main(["-n", "12", "--seed", "4"]) == 0

        out = capsys.readouterr().out
        assert len(out.splitlines()) == 12

        processes = read_workload(io.StringIO(out), 12)
        expected = generate_workload(12, seed=4)
        assert [(p.arrival, p.size, p.service) for p in processes] == expected
