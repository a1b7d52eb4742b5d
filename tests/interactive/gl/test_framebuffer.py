"""既定フレームバッファの色エンコーディングに応じた sRGB 出力の判定をテスト。"""

import logging

import pytest

from gammaramp.interactive.gl.framebuffer import GL_LINEAR, GL_SRGB, srgb_output_enabled


def test_srgb_output_enabled_on_srgb_back_buffer(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING):
        assert srgb_output_enabled(True, GL_SRGB) is True
    assert caplog.records == []


def test_srgb_output_falls_back_on_linear_back_buffer(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="gammaramp.interactive.gl.framebuffer"):
        assert srgb_output_enabled(True, GL_LINEAR) is False
    assert "not sRGB-encoded" in caplog.text
    assert "0x2601" in caplog.text


@pytest.mark.parametrize("encoding", [GL_SRGB, GL_LINEAR])
def test_srgb_output_disabled_when_not_requested(encoding, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING):
        assert srgb_output_enabled(False, encoding) is False
    assert caplog.records == []
