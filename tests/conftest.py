"""Pytest configuration and shared fixtures for model parser tests.

This module provides common fixtures used across the test suite, including
sample dva model sources, parser instances and temporary file factories.
"""

import tempfile
from pathlib import Path

import pytest
import structlog

from dva_parser.config import Settings

try:
    import tree_sitter
    import tree_sitter_javascript
    import tree_sitter_typescript

    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False


def pytest_collection_modifyitems(config, items):
    """Skip tests marked requires_tree_sitter when the grammars are missing."""
    if TREE_SITTER_AVAILABLE:
        return

    skip = pytest.mark.skip(reason="tree-sitter grammars not installed")
    for item in items:
        if item.get_closest_marker("requires_tree_sitter") is not None:
            item.add_marker(skip)


# ---------------------------------------------------------------------------
# Sample Model Source Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def default_export_model_code() -> str:
    """A JavaScript model exported as a default object literal."""
    return """import { fetchUser } from '../services/user';

export default {
  namespace: 'user',
  state: { current: null },
  reducers: {
    save(state, { payload }) {
      return { ...state, ...payload };
    },
    clear: () => ({ current: null }),
  },
  effects: {
    *fetch({ payload }, { call, put }) {
      const response = yield call(fetchUser, payload);
      yield put({ type: 'save', payload: { current: response } });
    },
  },
};
"""


@pytest.fixture
def typescript_model_code() -> str:
    """A TypeScript model wrapped in a type assertion."""
    return """import type { Model } from 'dva';

export default {
  namespace: 'todos',
  state: [] as string[],
  reducers: {
    add(state: string[], { payload }: { payload: string }) {
      return [...state, payload];
    },
  },
  effects: {},
} as Model;
"""


@pytest.fixture
def registered_models_code() -> str:
    """Models registered through calls, with unrelated top-level code."""
    return """const app = dva();

app.use(createLoading());

app.model({
  namespace: 'first',
  reducers: { a(state) { return state; } },
}, 'not a model', {
  namespace: 'second',
  effects: { *b() {} },
});

export default {
  namespace: 'third',
  reducers: { c(state) { return state; } },
};

app.start('#root');
"""


@pytest.fixture
def no_model_code() -> str:
    """Source without any object literal at the top level."""
    return """import React from 'react';

export function App() {
  return null;
}

const answer = 42;
"""


@pytest.fixture
def syntax_error_code() -> str:
    """Model source with a syntax error."""
    return """export default {
  namespace: 'broken',
  reducers: {
    save(state) { return state + ; },
  },
};
"""


# ---------------------------------------------------------------------------
# Parser Instance Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the environment file."""
    return Settings(_env_file=None)


@pytest.fixture
def source_parser():
    """Create a TreeSitterSourceParser instance."""
    from dva_parser.parser.tree_sitter import TreeSitterSourceParser

    return TreeSitterSourceParser()


@pytest.fixture
def model_parser(settings: Settings, source_parser):
    """Create a DvaModelParser wired to the file system."""
    from dva_parser.parser.model_parser import DvaModelParser
    from dva_parser.services import ExtensionConfigProvider

    return DvaModelParser(
        ExtensionConfigProvider(settings),
        source_parser=source_parser,
        settings=settings,
    )


# ---------------------------------------------------------------------------
# Temporary File Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def temp_source_file():
    """Factory fixture to create temp files with custom content."""
    created_files: list[Path] = []

    def _create_file(content: str, suffix: str = ".js") -> Path:
        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=suffix,
            delete=False,
            encoding="utf-8",
        ) as f:
            f.write(content)
            f.flush()
            temp_path = Path(f.name)
            created_files.append(temp_path)
            return temp_path

    yield _create_file

    for path in created_files:
        path.unlink(missing_ok=True)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore the default structlog configuration after each test."""
    yield
    structlog.reset_defaults()
