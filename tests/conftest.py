from tests.testing.invoker import strategy, sync_or_async

# Mark these imports as used so they don't get removed.
# They need to be imported in `conftest.py` so the fixtures are registered.
_ = (
    strategy,
    sync_or_async,
)
