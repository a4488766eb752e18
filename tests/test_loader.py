"""
Tests for the Auxiliary Data Loader
"""

import shutil

import numpy as np
import pytest
from lsgo_bench.core.errors import DataLoadError
from lsgo_bench.functions.benchmarks import Benchmark
from lsgo_bench.data.loader import (
    load_auxiliary_data, read_vector, read_permutation, read_matrix,
    read_sizes, read_weights, resolve_data_dir, data_file, DATA_DIR_ENV,
)


def write(path, text):
    path.write_text(text)
    return path


class TestReaders:
    """Test the individual file readers."""

    def test_vector_comma_and_newline(self, tmp_path):
        f = write(tmp_path / "v.txt", "1.5,2.5\n-3e2, 4\n\n5\n")
        np.testing.assert_array_equal(read_vector(f), [1.5, 2.5, -300.0, 4.0, 5.0])

    def test_vector_round_trips_repr(self, tmp_path):
        values = [0.1, 1.0 / 3.0, -2.718281828459045e-7]
        f = write(tmp_path / "v.txt", "\n".join(repr(v) for v in values))
        assert read_vector(f).tolist() == values

    def test_vector_count(self, tmp_path):
        f = write(tmp_path / "v.txt", "1,2,3")
        with pytest.raises(DataLoadError, match="expected 4"):
            read_vector(f, expected=4)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError) as info:
            read_vector(tmp_path / "nope.txt")
        assert info.value.path == str(tmp_path / "nope.txt")

    def test_bad_number(self, tmp_path):
        f = write(tmp_path / "v.txt", "1.0, abc")
        with pytest.raises(DataLoadError, match="invalid number"):
            read_vector(f)

    def test_permutation_is_zero_based(self, tmp_path):
        f = write(tmp_path / "p.txt", "3,1,2")
        np.testing.assert_array_equal(read_permutation(f), [2, 0, 1])

    def test_permutation_accepts_real_notation(self, tmp_path):
        f = write(tmp_path / "p.txt", "2.0,1.0")
        np.testing.assert_array_equal(read_permutation(f), [1, 0])

    @pytest.mark.parametrize("text", ["1,1,2", "0,1,2", "1,2,4", "1,2.5,3"])
    def test_permutation_not_bijection(self, tmp_path, text):
        f = write(tmp_path / "p.txt", text)
        with pytest.raises(DataLoadError):
            read_permutation(f)

    def test_matrix(self, tmp_path):
        f = write(tmp_path / "R2.txt", "1,2\n3,4\n")
        np.testing.assert_array_equal(read_matrix(f, 2), [[1.0, 2.0], [3.0, 4.0]])

    def test_matrix_wrong_row_count(self, tmp_path):
        """A matrix with fewer rows than its declared size is rejected."""
        f = write(tmp_path / "R3.txt", "1,0,0\n0,1,0\n")
        with pytest.raises(DataLoadError, match="2 rows, expected 3"):
            read_matrix(f, 3)

    def test_matrix_ragged_row(self, tmp_path):
        f = write(tmp_path / "R2.txt", "1,0\n0,1,0\n")
        with pytest.raises(DataLoadError, match="row 2"):
            read_matrix(f, 2)

    def test_sizes_and_weights(self, tmp_path):
        s = write(tmp_path / "s.txt", "25\n50\n100\n")
        w = write(tmp_path / "w.txt", "0.5\n1e3\n2\n")
        np.testing.assert_array_equal(read_sizes(s, 3), [25, 50, 100])
        np.testing.assert_array_equal(read_weights(w, 3), [0.5, 1000.0, 2.0])

    def test_sizes_positive(self, tmp_path):
        s = write(tmp_path / "s.txt", "25\n0\n")
        with pytest.raises(DataLoadError):
            read_sizes(s)


class TestDataDir:

    def test_explicit(self, tmp_path):
        assert resolve_data_dir(tmp_path) == tmp_path

    def test_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
        assert resolve_data_dir() == tmp_path

    def test_default(self, monkeypatch):
        monkeypatch.delenv(DATA_DIR_ENV, raising=False)
        assert str(resolve_data_dir()) == "cdatafiles"

    def test_file_names(self, tmp_path):
        assert data_file(tmp_path, 4, "R25").name == "F4-R25.txt"
        assert data_file(tmp_path, 13, "xopt").name == "F13-xopt.txt"


class TestLoadAuxiliaryData:
    """Test loading complete per-function data sets."""

    def test_shift_only(self, data_dir):
        data = load_auxiliary_data(1, data_dir, dimension=1000)
        assert data.xopt.shape == (1000,)
        assert data.permutation is None
        assert not data.is_decomposed

    def test_partially_separable(self, data_dir):
        data = load_auxiliary_data(4, data_dir, dimension=1000, n_components=7)
        assert len(data.components) == 7
        assert data.covered < 1000
        assert sorted(data.permutation.tolist()) == list(range(1000))
        for c in data.components:
            assert data.rotations[c.size].shape == (c.size, c.size)

    def test_overlapping(self, data_dir):
        data = load_auxiliary_data(13, data_dir, dimension=905, n_components=20,
                                   overlap=5, full_coverage=True)
        assert data.components[1].start == data.components[0].size - 5
        assert data.covered == 905

    def test_conflicting_optima(self, data_dir):
        data = load_auxiliary_data(14, data_dir, dimension=905, n_components=20,
                                   overlap=5, full_coverage=True, component_shifts=True)
        optima = data.component_optima()
        assert [len(o) for o in optima] == [c.size for c in data.components]
        assert len(data.xopt) == sum(c.size for c in data.components)

    def test_arrays_are_read_only(self, data_dir):
        data = load_auxiliary_data(8, data_dir, dimension=1000, n_components=20,
                                   full_coverage=True)
        with pytest.raises(ValueError):
            data.xopt[0] = 1.0
        with pytest.raises(ValueError):
            data.permutation[0] = 1
        matrix = next(iter(data.rotations.values()))
        with pytest.raises(ValueError):
            matrix[0, 0] = 1.0

    def test_wrong_dimension(self, data_dir):
        with pytest.raises(DataLoadError, match="expected 999"):
            load_auxiliary_data(1, data_dir, dimension=999)

    def test_coverage_must_match(self, data_dir):
        """F4's seven components do not cover all 1000 indices."""
        with pytest.raises(DataLoadError, match="cover"):
            load_auxiliary_data(4, data_dir, dimension=1000, n_components=7,
                                full_coverage=True)

    def test_wrong_component_count(self, data_dir):
        with pytest.raises(DataLoadError, match="size table"):
            load_auxiliary_data(8, data_dir, dimension=1000, n_components=19)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DataLoadError, match="data directory not found"):
            load_auxiliary_data(1, tmp_path / "missing", dimension=1000)

    def test_truncated_rotation(self, data_dir, tmp_path):
        """A rotation file with fewer rows than its size fails the load."""
        for f in data_dir.glob("F8-*"):
            shutil.copy(f, tmp_path / f.name)
        sizes = read_sizes(tmp_path / "F8-s.txt")
        victim = tmp_path / f"F8-R{int(sizes[0])}.txt"
        lines = victim.read_text().splitlines()
        victim.write_text("\n".join(lines[:-1]) + "\n")
        with pytest.raises(DataLoadError, match="rows"):
            load_auxiliary_data(8, tmp_path, dimension=1000, n_components=20,
                                full_coverage=True)

    def test_missing_rotation(self, data_dir, tmp_path):
        for f in data_dir.glob("F9-*"):
            shutil.copy(f, tmp_path / f.name)
        sizes = read_sizes(tmp_path / "F9-s.txt")
        (tmp_path / f"F9-R{int(sizes[0])}.txt").unlink()
        with pytest.raises(DataLoadError, match="not found"):
            load_auxiliary_data(9, tmp_path, dimension=1000, n_components=20,
                                full_coverage=True)

    def test_partially_separable_needs_residual(self, tmp_path):
        """Components covering every index leave F4-F7 no separable tail."""
        sizes = [100] * 5 + [250, 250]
        write(tmp_path / "F6-xopt.txt", "\n".join(["0.0"] * 1000))
        write(tmp_path / "F6-p.txt", ",".join(str(i) for i in range(1, 1001)))
        write(tmp_path / "F6-s.txt", "\n".join(str(s) for s in sizes))
        write(tmp_path / "F6-w.txt", "\n".join(["1.0"] * 7))
        for size in (100, 250):
            rows = (",".join("1" if i == j else "0" for j in range(size)) for i in range(size))
            write(tmp_path / f"F6-R{size}.txt", "\n".join(rows))

        with pytest.raises(DataLoadError, match="less than dimension 1000"):
            load_auxiliary_data(6, tmp_path, dimension=1000, n_components=7,
                                residual=True)
        with pytest.raises(DataLoadError):
            Benchmark(6, tmp_path).load()
        # the same layout is valid when no tail is required
        data = load_auxiliary_data(6, tmp_path, dimension=1000, n_components=7)
        assert data.covered == 1000

    def test_fingerprint(self, data_dir):
        a = load_auxiliary_data(2, data_dir, dimension=1000)
        b = load_auxiliary_data(2, data_dir, dimension=1000)
        c = load_auxiliary_data(3, data_dir, dimension=1000)
        assert a.fingerprint() == b.fingerprint()
        assert a.fingerprint() != c.fingerprint()
        assert len(a.fingerprint()) == 64
