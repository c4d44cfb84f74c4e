from __future__ import annotations

import random
from types import SimpleNamespace

import pytest

from htmllite import (
    CompilerState,
    CompilerStateError,
    EndTag,
    GrammarError,
    MismatchedTagError,
    OneShot,
    SharedResourceError,
    Span,
    SpanCompiler,
    Spans,
    StartTag,
    Text,
    UnboundReferenceError,
    UnclosedTagError,
    UnstartedTagError,
    compileMarkup,
    compileWords,
    tryCompileMarkup,
)


def test_empty_input_compiles_to_nothing():
    assert compileMarkup("") == Spans()
    assert compileWords([]) == Spans()


def test_one_span_per_text_word():
    spans = compileMarkup('{"Hello there. "} <i> {"I\'m italic now! "} </i> <b> <i> {"both"} </i> </b>')
    assert [s.text for s in spans] == ["Hello there. ", "I'm italic now! ", "both"]
    assert [s.tags for s in spans] == [(), ("i",), ("b", "i")]
    assert spans.text == "Hello there. I'm italic now! both"


def test_identical_compilations_are_equal():
    markup = '<b color="red" n=3> {"a"} </b> {"b"}'
    assert compileMarkup(markup) == compileMarkup(markup)
    assert compileMarkup(markup) != compileMarkup('<b color="blue" n=3> {"a"} </b> {"b"}')

    spans = compileMarkup(markup)
    other = compileMarkup(markup)
    spans[0].take("color")
    assert spans != other


def test_single_span():
    span = Span("only", ("b",), loc="1:1")
    spans = Spans.single(span)
    assert len(spans) == 1
    assert spans[0] is span
    assert spans == Spans([span])
    assert spans.text == "only"


def test_repeated_tags_are_kept():
    (span,) = compileMarkup('<b><b>{"x"}</b></b>')
    assert span.tags == ("b", "b")


def _randomWellNested(rng: random.Random) -> tuple[list, list[tuple[str, ...]]]:
    words: list = []
    expected: list[tuple[str, ...]] = []
    open_: list[str] = []
    for _ in range(rng.randrange(1, 40)):
        choice = rng.random()
        if choice < 0.35:
            name = rng.choice("abcde")
            open_.append(name)
            words.append(StartTag(name))
        elif choice < 0.6 and open_:
            words.append(EndTag(open_.pop()))
        else:
            words.append(Text(f"t{len(expected)}"))
            expected.append(tuple(open_))
    while open_:
        words.append(EndTag(open_.pop()))
    return words, expected


@pytest.mark.parametrize("seed", range(20))
def test_well_nested_input_always_compiles(seed):
    words, expected = _randomWellNested(random.Random(seed))
    spans = compileWords(words)
    assert len(spans) == len(expected)
    assert [s.tags for s in spans] == expected
    assert [s.text for s in spans] == [f"t{i}" for i in range(len(expected))]


def test_innermost_attribute_wins():
    (span,) = compileMarkup('<a x="1"> <b x="2"> {"t"} </b> </a>')
    assert span.get("x", str) == "2"


def test_attributes_dont_leak_across_siblings():
    spans = compileMarkup('<a x="1"> {"t1"} <b x="2" y="3"> {"t2"} </b> {"t3"} </a> {"t4"}')
    assert [s.get("x", str) for s in spans] == ["1", "2", "1", None]
    assert [s.get("y", str) for s in spans] == [None, "3", None, None]
    assert len(spans[3].attributes) == 0


def test_mismatched_close():
    with pytest.raises(MismatchedTagError) as excinfo:
        compileMarkup('<a> {"t"} </b>')
    assert excinfo.value.loc == "1:11"


def test_unstarted_close():
    with pytest.raises(UnstartedTagError):
        compileMarkup("</a>")


def test_unclosed_tag():
    with pytest.raises(UnclosedTagError) as excinfo:
        compileMarkup('<a> <b> {"t"} </b>')
    assert excinfo.value.loc == "1:1"
    assert "<a> at 1:1" in excinfo.value.message


def test_grammar_errors_abort_compilation():
    with pytest.raises(GrammarError):
        compileMarkup('<a> {"t"} </a> <b x>')


def test_take_once_on_a_compiled_span():
    def tada():
        return "tada"

    (span,) = compileMarkup('<b click={OneShot(tada)}> {"click me"} </b>', None, OneShot=OneShot, tada=tada)
    assert span.get("click") is None
    handler = span.take("click", OneShot)
    assert isinstance(handler, OneShot)
    assert handler() == "tada"
    assert span.take("click", OneShot) is None
    assert span.get("click", OneShot) is None


def test_calls_build_a_fresh_value_per_span():
    spans = compileMarkup(
        '<b click={OneShot(f)}> {"a"} <i> {"b"} </i> </b>',
        None,
        OneShot=OneShot,
        f=print,
    )
    first = spans[0].take("click", OneShot)
    second = spans[1].take("click", OneShot)
    assert first is not None and second is not None
    assert first is not second


def test_references_are_resolved_from_bindings():
    theme = SimpleNamespace(accent="#9bd1e5", sizes=SimpleNamespace(big=30))
    (span,) = compileMarkup(
        '<b color={theme.accent} font_size=theme.sizes.big label="plain" n=2.5> {"x"} </b>',
        None,
        theme=theme,
    )
    assert span.get("color", str) == "#9bd1e5"
    assert span.get("font_size", int) == 30
    assert span.get("label", str) == "plain"
    assert span.get("n", float) == 2.5


def test_bindings_may_shadow_parameter_names():
    (span,) = compileMarkup('<b x={text} y={config}> {"t"} </b>', None, text="T", config="C")
    assert (span.get("x"), span.get("y")) == ("T", "C")


def test_unbound_references():
    with pytest.raises(UnboundReferenceError) as excinfo:
        compileMarkup('<b click={missing}> {"x"} </b>')
    assert excinfo.value.loc == "1:1"

    with pytest.raises(UnboundReferenceError):
        compileMarkup('<b c={thing.nope}> {"x"} </b>', None, thing=SimpleNamespace())

    with pytest.raises(UnboundReferenceError):
        compileMarkup('<b c={notAFunction()}> {"x"} </b>', None, notAFunction=3)


def test_unreferenced_attributes_need_no_bindings():
    # Values are only evaluated when a span is emitted.
    assert compileMarkup("<b click={missing}> </b>") == Spans()


def test_words_built_directly():
    spans = compileWords(
        [
            StartTag("a", {"x": 1, "obj": [1, 2]}),
            Text("t"),
            EndTag("a"),
        ],
    )
    (span,) = spans
    assert span.get("x", int) == 1
    assert span.get("obj", list) == [1, 2]
    assert span.loc is None


def test_a_move_only_value_cant_belong_to_two_spans():
    shot = OneShot(print)
    words = [StartTag("b", {"click": shot}), Text("a"), Text("b"), EndTag("b")]
    with pytest.raises(SharedResourceError):
        compileWords(words)

    (span,) = compileWords([StartTag("b", {"click": shot}), Text("a"), EndTag("b")])
    assert span.take("click") is shot


def test_a_move_only_value_cant_belong_to_two_attributes():
    with pytest.raises(SharedResourceError) as excinfo:
        compileMarkup('<b click={h} over={h}> {"a"} </b>', None, h=OneShot(print))
    assert "attribute 'click' of the same span" in excinfo.value.message

    with pytest.raises(SharedResourceError) as excinfo:
        compileMarkup('<b click={h}> {"a"} {"b"} </b>', None, h=OneShot(print))
    assert "another span, at 1:15" in excinfo.value.message


def test_a_bound_move_only_value_cant_belong_to_two_spans():
    with pytest.raises(SharedResourceError) as excinfo:
        compileMarkup('<b click={shot}> {"a"} {"b"} </b>', None, shot=OneShot(print))
    assert excinfo.value.loc == "1:1"


def test_compiler_states():
    compiler = SpanCompiler()
    assert compiler.state is CompilerState.Ready
    compiler.feed(StartTag("a"))
    compiler.feed(StartTag("b"))
    assert compiler.state is CompilerState.InScope
    span = compiler.feed(Text("t"))
    assert span is not None and span.tags == ("a", "b")
    compiler.feed(EndTag("b"))
    assert compiler.state is CompilerState.InScope
    compiler.feed(EndTag("a"))
    assert compiler.state is CompilerState.Ready
    spans = compiler.finish()
    assert compiler.state is CompilerState.Finished
    assert [s.text for s in spans] == ["t"]

    with pytest.raises(CompilerStateError):
        compiler.feed(Text("more"))
    with pytest.raises(CompilerStateError):
        compiler.finish()


def test_finished_stays_finished():
    compiler = SpanCompiler()
    compiler.feed(Text("t"))
    compiler.finish()
    with pytest.raises(CompilerStateError):
        compiler.feedAll([Text("more")])
    assert compiler.state is CompilerState.Finished


def test_failure_is_terminal():
    compiler = SpanCompiler()
    with pytest.raises(UnstartedTagError):
        compiler.feed(EndTag("a"))
    assert compiler.state is CompilerState.Failed
    with pytest.raises(CompilerStateError):
        compiler.feed(Text("t"))

    compiler = SpanCompiler()
    compiler.feed(StartTag("a"))
    with pytest.raises(UnclosedTagError):
        compiler.finish()
    assert compiler.state is CompilerState.Failed


def test_each_compilation_starts_fresh():
    assert compileMarkup('<a x="1"> {"t"} </a>')[0].get("x") == "1"
    (span,) = compileMarkup('{"t"}')
    assert span.tags == ()
    assert span.get("x") is None


def test_try_compile_reports_instead_of_raising(messages):
    assert tryCompileMarkup('<a> {"t"} </b>') is None
    output = messages.getvalue()
    assert "MismatchedTagError" in output
    assert "LINE 1:11" in output

    spans = tryCompileMarkup('<a> {"t"} </a>')
    assert spans is not None and len(spans) == 1


def test_try_compile_can_exit_early():
    import io

    from htmllite import messages as m

    with m.withMessageState(io.StringIO(), dieWhen="early"):
        with pytest.raises(SystemExit) as excinfo:
            tryCompileMarkup("</a>")
    assert excinfo.value.code == 2
