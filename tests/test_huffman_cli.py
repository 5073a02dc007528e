import pytest

import huffman_cli
import huffman_format


@pytest.fixture
def sample(tmp_path):
	path = tmp_path / 'input.txt'
	path.write_bytes(b'Huffman coding algorithm\n' * 10)
	return path


def test_encode_then_decode(tmp_path, sample, capsys):
	enc = tmp_path / 'out.txt'
	dec = tmp_path / 'back.txt'

	assert huffman_cli.main([str(sample), str(enc)]) == 0
	assert 'symbols' in capsys.readouterr().out
	assert not huffman_format.is_packed(enc.read_bytes())

	assert huffman_cli.main(['-d', str(enc), str(dec)]) == 0
	assert dec.read_bytes() == sample.read_bytes()


def test_packed_flag(tmp_path, sample):
	enc = tmp_path / 'out.huf'
	dec = tmp_path / 'back.txt'

	assert huffman_cli.main(['--packed', str(sample), str(enc)]) == 0
	assert huffman_format.is_packed(enc.read_bytes())
	assert huffman_cli.main(['-d', str(enc), str(dec)]) == 0
	assert dec.read_bytes() == sample.read_bytes()


def test_default_output_names(tmp_path, sample, monkeypatch):
	monkeypatch.chdir(tmp_path)

	assert huffman_cli.main([str(sample)]) == 0
	assert (tmp_path / 'encoded.txt').exists()
	assert huffman_cli.main(['-d', 'encoded.txt']) == 0
	assert (tmp_path / 'decoded.txt').read_bytes() == sample.read_bytes()


def test_missing_input_reports_error(tmp_path, capsys):
	code = huffman_cli.main([str(tmp_path / 'nope.txt'), str(tmp_path / 'out.txt')])
	assert code == 1
	assert capsys.readouterr().err.startswith('huffman:')


def test_corrupt_input_reports_error(tmp_path, capsys):
	bad = tmp_path / 'bad.txt'
	bad.write_text('2\n97\t0.5\t0\n98\t0.5\t00\n\n0\n')
	assert huffman_cli.main(['-d', str(bad), str(tmp_path / 'out.txt')]) == 1
	assert 'prefix' in capsys.readouterr().err


def test_usage_without_arguments():
	with pytest.raises(SystemExit):
		huffman_cli.main([])
