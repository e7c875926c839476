"""Tests for the tracer module."""

import json

import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        """Pixel buffers are summarized with shape and dtype."""
        from reticlegen.tracer import summarize

        arr = np.zeros((256, 256, 4), dtype=np.uint8)
        summary = summarize(arr)

        assert "ndarray" in summary
        assert "256x256x4" in summary
        assert "uint8" in summary

    def test_summary_capped_length(self):
        from reticlegen.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}

        assert len(summarize(large_dict, max_len=20)) <= 20

    def test_list_summary(self):
        from reticlegen.tracer import summarize

        summary = summarize([1, 2, 3, 4, 5])

        assert "list" in summary
        assert "len=5" in summary

    def test_string_summary(self):
        from reticlegen.tracer import summarize

        summary = summarize("a" * 1000)

        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_none_summary(self):
        from reticlegen.tracer import summarize

        assert summarize(None) == "None"

    def test_pydantic_model_summary(self):
        from reticlegen.colors import parse_color_spec
        from reticlegen.tracer import summarize

        assert summarize(parse_color_spec("FF0000")).startswith("ColorSpec(fields=")

    def test_reticle_config_summary(self):
        from reticlegen.models import ReticleConfig
        from reticlegen.tracer import summarize

        assert summarize(ReticleConfig()) == "ReticleConfig(size=256,ring=118/20,spokes=4,tip=1.5)"

    def test_spoke_outline_summary(self, razor_config):
        from reticlegen.geometry.spoke_outline import build_reticle_outlines
        from reticlegen.tracer import summarize

        outline = build_reticle_outlines(razor_config)[0]

        assert summarize(outline) == "SpokeOutline(razor,angle=45,curves=6)"


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        from reticlegen.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        try:
            with tracer.span("outer", module="test"):
                with tracer.span("inner", module="test"):
                    tracer.event("inside")
        finally:
            configure_tracer(enabled=False)

        lines = capsys.readouterr().err.strip().split("\n")

        assert len(lines) == 5
        assert "test:outer  start" in lines[0]
        assert "  test:inner  start" in lines[1]
        assert "end ok" in lines[-1]

    def test_span_failure_logged_and_raised(self, capsys):
        from reticlegen.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        try:
            with pytest.raises(ValueError):
                with tracer.span("boom", module="test"):
                    raise ValueError("bad")
            # depth restored after failure
            tracer.event("after")
        finally:
            configure_tracer(enabled=False)

        lines = capsys.readouterr().err.strip().split("\n")
        assert "ERROR" in lines[1]
        assert "ValueError: bad" in lines[1]
        assert lines[2].split("INFO", 1)[1] == "    after"

    def test_level_filtering(self, capsys):
        from reticlegen.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="WARN")
        try:
            get_tracer().event("quiet", level="DEBUG")
            get_tracer().event("loud", level="ERROR")
        finally:
            configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_json_output(self, capsys):
        from reticlegen.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, json_output=True)
        try:
            get_tracer().event("hello", count=3)
        finally:
            configure_tracer(enabled=False)

        lines = capsys.readouterr().err.strip().split("\n")
        record = json.loads(lines[1])
        assert record["message"] == "hello count=3"
        assert record["meta"] == {"count": "3"}

    def test_trace_file(self, temp_dir):
        import os
        from reticlegen.tracer import configure_tracer, get_tracer

        path = os.path.join(temp_dir, "trace.log")
        configure_tracer(enabled=True, file_path=path)
        try:
            get_tracer().event("to file")
        finally:
            configure_tracer(enabled=False)

        with open(path, "r", encoding="utf-8") as f:
            assert "to file" in f.read()

    def test_tracer_disabled_no_output(self, capsys):
        from reticlegen.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        from reticlegen.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_logs_when_enabled(self, capsys):
        from reticlegen.tracer import configure_tracer, trace

        @trace(label="labelled", arg_names=["x"])
        def my_func(x=0):
            return x + 1

        configure_tracer(enabled=True)
        try:
            assert my_func(x=2) == 3
        finally:
            configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "labelled  start x=2" in err

    def test_decorator_with_exception(self):
        from reticlegen.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()

    def test_decorator_logs_batch_arguments(self, temp_dir, default_config, capsys):
        """generate_batch reports its output format in the span start line."""
        import os
        from reticlegen.batch import generate_batch
        from reticlegen.tracer import configure_tracer

        configure_tracer(enabled=True)
        try:
            generate_batch(default_config, [], os.path.join(temp_dir, "out"), output_format="svg")
        finally:
            configure_tracer(enabled=False)

        assert "generate_batch  start output_format='svg'" in capsys.readouterr().err
