"""Tests for homerange_crw.utils — provenance metadata and timer."""

import json

from homerange_crw.config import default_config
from homerange_crw.utils import config_hash, file_sha256, run_metadata, timer


class TestHashes:
    def test_file_sha256(self, tmp_path):
        f = tmp_path / 'a.txt'
        f.write_bytes(b'abc')
        assert file_sha256(f) == (
            'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
        )

    def test_config_hash_stable(self):
        assert config_hash('a: 1\n') == config_hash('a: 1\n')
        assert config_hash('a: 1\n') != config_hash('a: 2\n')


class TestRunMetadata:
    def test_fields(self, tmp_path):
        table = tmp_path / 'params.csv'
        table.write_text('x\n')
        meta = run_metadata(default_config(), table, n_rows=3, n_skipped=1)
        assert meta['n_rows'] == 3
        assert meta['n_skipped'] == 1
        assert meta['seed'] == 42
        assert meta['parameter_file_sha256'] == file_sha256(table)
        assert meta['config']['simulation']['n_steps'] == 5000
        json.dumps(meta)  # serializable

    def test_config_hash_tracks_config(self):
        a = default_config()
        b = default_config()
        b.simulation.seed = 1
        assert (run_metadata(a, None, 0, 0)['config_sha256']
                != run_metadata(b, None, 0, 0)['config_sha256'])

    def test_no_parameter_file(self):
        meta = run_metadata(default_config(), None, 0, 0)
        assert meta['parameter_file'] is None
        assert meta['parameter_file_sha256'] is None


class TestTimer:
    def test_prints_label(self, capsys):
        with timer("block"):
            pass
        assert '[block]' in capsys.readouterr().out
