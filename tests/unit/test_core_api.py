import pytest
from typing import Iterator, List
from typeguard import TypeCheckError

from lijnstatus.core.pipeline import Pipeline
from lijnstatus.core.stage import Stage, stage, aggregator_stage
from lijnstatus.core.context import Context
from lijnstatus.core.hooks import Hooks

# --- Test Stages ---

@stage
def add_one(x: int) -> int:
    return x + 1

@stage
def to_string(x: int) -> str:
    return str(x)

@stage
def duplicate(x: int) -> Iterator[int]:
    yield x
    yield x

@stage
def drop_odd(x: int):
    if x % 2 == 0:
        return x
    return None

@stage
def context_incrementer(context: Context, x: int) -> int:
    context.inc("my_counter")
    return x

@aggregator_stage
def total(items: List[int]) -> int:
    return sum(items)

@stage
def numbers() -> List[int]:
    return [1, 2, 3]

# --- Core Tests ---

def test_pipeline_creation():
    p = Pipeline()
    assert isinstance(p, Pipeline)
    assert p.stages == []

def test_decorator_creation():
    assert isinstance(add_one, Stage)
    assert add_one.name == "add_one"
    assert add_one.stage_type == "itemwise"
    assert total.stage_type == "aggregator"

def test_stage_without_inputs_is_a_source():
    assert numbers.stage_type == "source"

def test_invalid_stage_type():
    def f(x):
        return x
    with pytest.raises(ValueError):
        Stage(f, stage_type="sideways")

def test_pipeline_composition():
    p = Pipeline() | add_one | to_string
    assert len(p.stages) == 2
    assert p.stages[0].name == "add_one"
    assert p.stages[1].name == "to_string"

def test_stage_composition_with_rshift():
    p = add_one >> to_string
    assert [s.name for s in p.stages] == ["add_one", "to_string"]

def test_composition_does_not_modify_operands():
    base = Pipeline() | add_one
    extended = base | to_string
    assert len(base.stages) == 1
    assert len(extended.stages) == 2

def test_pipelines_compose_by_concatenation():
    p = (add_one | add_one) | (add_one | to_string)
    assert [s.name for s in p.stages] == ["add_one", "add_one", "add_one", "to_string"]
    results, _ = p.collect([0])
    assert results == ["3"]

def test_add_is_in_place():
    p = Pipeline()
    assert p.add(add_one).add(to_string) is p
    assert len(p.stages) == 2

def test_unsupported_composition():
    with pytest.raises(TypeError):
        Pipeline() | "not a stage"

def test_source_must_come_first():
    with pytest.raises(TypeError):
        add_one | numbers

def test_simple_pipeline_execution():
    pipeline = Pipeline() | add_one | add_one
    results, _ = pipeline.collect([1, 2, 3])
    assert results == [3, 4, 5]

def test_generator_and_none_outputs():
    results, _ = (duplicate | drop_odd).collect([1, 2])
    assert results == [2, 2]

def test_aggregator_receives_whole_stream():
    results, _ = (add_one | total).collect([1, 2, 3])
    assert results == [9]

def test_source_stage_runs_without_data():
    results, _ = (numbers | add_one).collect()
    assert results == [2, 3, 4]

def test_run_without_data_requires_source():
    with pytest.raises(TypeError):
        Pipeline([add_one]).run()

def test_run_is_lazy_until_iterated():
    seen = []

    @stage
    def record(x: int) -> int:
        seen.append(x)
        return x

    stream, _ = Pipeline([record]).run([1, 2])
    assert seen == []
    assert list(stream) == [1, 2]
    assert seen == [1, 2]

def test_single_stage_collect():
    results, _ = add_one.collect([1])
    assert results == [2]

def test_typechecked_stage_rejects_wrong_input():
    with pytest.raises(TypeCheckError):
        add_one.collect(["one"])

def test_context_creation_and_inc():
    ctx = Context()
    ctx.inc("test_key")
    ctx.inc("test_key", 5)
    assert ctx.get("test_key") == 6
    assert ctx.to_dict() == {"test_key": 6}

def test_context_initial_data_and_set():
    ctx = Context({"a": 1})
    ctx.set("b", 2)
    ctx.update({"c": 3})
    assert ctx.to_dict() == {"a": 1, "b": 2, "c": 3}

def test_context_is_used_in_pipeline():
    pipeline = Pipeline() | context_incrementer
    _, context = pipeline.collect([1, 2, 3])
    assert context.get("my_counter") == 3

def test_each_run_gets_a_fresh_context():
    pipeline = Pipeline() | context_incrementer
    _, first = pipeline.collect([1])
    _, second = pipeline.collect([1])
    assert first is not second
    assert second.get("my_counter") == 1

def test_metrics():
    @stage
    def passthrough(x: int) -> Iterator[int]:
        yield x

    pipeline = Pipeline([passthrough])
    pipeline.collect([1, 2, 3])
    metrics = pipeline.metrics["stages"]["passthrough"]
    assert metrics["items_in"] == 3
    assert metrics["items_out"] == 3
    assert metrics["errors"] == 0

def test_metrics_reflect_the_latest_run_only():
    @stage
    def passthrough(x: int) -> int:
        return x

    pipeline = Pipeline([passthrough])
    pipeline.collect([1, 2, 3])
    pipeline.collect([4, 5])
    metrics = pipeline.metrics["stages"]["passthrough"]
    assert metrics["items_in"] == 2
    assert metrics["items_out"] == 2

def test_hooks_are_called():
    events = []
    hooks = Hooks(
        before_stage=lambda s, ctx, item: events.append(("before", item)),
        after_stage=lambda s, ctx, item, outputs, elapsed: events.append(("after", item, outputs)),
        on_worker_init=lambda ctx: events.append(("init",)) or {"ready": True},
        on_worker_exit=lambda ctx: events.append(("exit", ctx.worker_state.get("ready"))),
    )

    @stage(hooks=hooks)
    def double(x: int) -> int:
        return x * 2

    double.collect([1, 2])
    assert events == [
        ("init",),
        ("before", 1),
        ("after", 1, [2]),
        ("before", 2),
        ("after", 2, [4]),
        ("exit", True),
    ]

def test_on_stream_end_hook_for_aggregators():
    events = []

    @aggregator_stage(hooks=Hooks(on_stream_end=lambda ctx: events.append("end")))
    def count(items: List[int]) -> int:
        events.append("count")
        return len(items)

    results, _ = count.collect([1, 2])
    assert results == [2]
    assert events == ["end", "count"]

def test_repr():
    p = Pipeline([add_one, to_string], name="demo")
    assert repr(p) == "Pipeline(name='demo', stages=[add_one | to_string])"
    assert repr(add_one) == "Stage(name='add_one', type='itemwise')"
