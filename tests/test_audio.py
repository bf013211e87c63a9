import subprocess
from unittest import mock

from dwmkit.status.audio import alsa_master_vol, parse_amixer_tail, vol_perc


def test_parse_unmuted():
    assert parse_amixer_tail(" [100%] [on]\n") == "100%"


def test_parse_muted():
    assert parse_amixer_tail(" [50%] [off]\n") == "MUTE"


def test_parse_empty():
    assert parse_amixer_tail("") == "MUTE"


def test_alsa_master_vol_uses_amixer_output():
    done = subprocess.CompletedProcess(args="amixer", returncode=0, stdout=b"  [42%] [on]\n")
    with mock.patch("dwmkit.status.audio.subprocess.run", return_value=done):
        assert alsa_master_vol() == "42%"


def test_alsa_master_vol_muted():
    done = subprocess.CompletedProcess(args="amixer", returncode=0, stdout=b" [42%] [off]\n")
    with mock.patch("dwmkit.status.audio.subprocess.run", return_value=done):
        assert alsa_master_vol() == "MUTE"


def test_vol_perc_missing_device(tmp_path):
    assert vol_perc(str(tmp_path / "mixer")) is None


def test_vol_perc_not_a_mixer(tmp_path):
    path = tmp_path / "plain"
    path.write_text("not a device")
    assert vol_perc(str(path)) is None