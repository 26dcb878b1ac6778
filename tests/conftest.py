from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

FRONTEND_PLUGIN_TS = """\
import {
  createPlugin,
  createRoutableExtension,
} from '@backstage/core-plugin-api';

import { rootRouteRef } from './routes';

export const myServicePlugin = createPlugin({
  id: 'my-service',
  routes: {
    root: rootRouteRef,
  },
});

export const MyServiceRoot = myServicePlugin.provide(
  createRoutableExtension({
    name: 'MyServiceRoot',
    component: () =>
      import('./components/ExampleComponent').then(m => m.ExampleComponent),
    mountPoint: rootRouteRef,
  }),
);
"""

EXAMPLE_COMPONENT_TSX = """\
import { Typography, Grid } from '@material-ui/core';
import {
  InfoCard,
  Header,
  Page,
  Content,
} from '@backstage/core-components';
import { ExampleFetchComponent } from '../ExampleFetchComponent';

export const ExampleComponent = () => (
  <Page themeId="tool">
    <Header title="Welcome to my-service!" />
    <Content>
      <Grid container spacing={3} direction="column">
        <Grid item>
          <InfoCard title="Information card">
            <Typography variant="body1">
              All content should be wrapped in a card like this.
            </Typography>
          </InfoCard>
        </Grid>
        <Grid item>
          <ExampleFetchComponent />
        </Grid>
      </Grid>
    </Content>
  </Page>
);
"""

EXAMPLE_COMPONENT_TEST_TSX = """\
import { ExampleComponent } from './ExampleComponent';
import { screen } from '@testing-library/react';
import { renderInTestApp } from '@backstage/test-utils';

describe('ExampleComponent', () => {
  it('should render', async () => {
    await renderInTestApp(<ExampleComponent />);
    expect(screen.getByText('Welcome to my-service!')).toBeInTheDocument();
  });
});
"""

BACKEND_PLUGIN_TS = """\
import {
  coreServices,
  createBackendPlugin,
} from '@backstage/backend-plugin-api';
import { createRouter } from './router';
import { todoListServiceRef } from './services/TodoListService';

/**
 * examplePlugin backend plugin
 *
 * @public
 */
export const examplePlugin = createBackendPlugin({
  pluginId: 'example',
  register(env) {
    env.registerInit({
      deps: {
        httpAuth: coreServices.httpAuth,
        httpRouter: coreServices.httpRouter,
        todoList: todoListServiceRef,
      },
      async init({ httpAuth, httpRouter, todoList }) {
        httpRouter.use(
          await createRouter({
            httpAuth,
            todoList,
          }),
        );
        httpRouter.addAuthPolicy({
          path: '/health',
          allow: 'unauthenticated',
        });
      },
    });
  },
});
"""

BACKEND_ROUTER_TS = """\
import { HttpAuthService } from '@backstage/backend-plugin-api';
import { InputError } from '@backstage/errors';
import { z } from 'zod';
import express from 'express';
import Router from 'express-promise-router';
import { TodoListService } from './services/TodoListService/types';

export async function createRouter({
  httpAuth,
  todoList,
}: {
  httpAuth: HttpAuthService;
  todoList: TodoListService;
}): Promise<express.Router> {
  const router = Router();
  router.use(express.json());

  router.post('/todos', async (req, res) => {
    const parsed = todoSchema.safeParse(req.body);
    if (!parsed.success) {
      throw new InputError(parsed.error.toString());
    }
    const result = await todoList.createTodo(parsed.data, {
      credentials: await httpAuth.credentials(req, { allow: ['user'] }),
    });
    res.status(201).json(result);
  });

  router.get('/todos', async (_req, res) => {
    res.json(await todoList.listTodos());
  });

  return router;
}
"""


def write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def write_manifest(root: Path, plugin_id: str | None, role: str = "frontend-plugin") -> None:
    backstage: dict[str, str] = {"role": role}
    if plugin_id is not None:
        backstage["pluginId"] = plugin_id
    manifest = {"name": f"@internal/plugin-{plugin_id or 'unknown'}", "backstage": backstage}
    write(root / "package.json", json.dumps(manifest, indent=2) + "\n")


def snapshot(root: Path) -> dict[str, bytes]:
    """Every file under ``root`` with its content, for before/after comparisons."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture()
def frontend_package(tmp_path: Path) -> Path:
    root = tmp_path / "plugins" / "my-service"
    write_manifest(root, "my-service")
    write(root / "src" / "plugin.ts", FRONTEND_PLUGIN_TS)
    write(root / "src" / "plugin.test.ts", "import { myServicePlugin } from './plugin';\n")
    write(root / "src" / "routes.ts", "export const rootRouteRef = createRouteRef({ id: 'my-service' });\n")
    write(
        root / "src" / "index.ts",
        "export { myServicePlugin, MyServiceRoot } from './plugin';\n",
    )
    components = root / "src" / "components"
    write(components / "ExampleComponent" / "ExampleComponent.tsx", EXAMPLE_COMPONENT_TSX)
    write(
        components / "ExampleComponent" / "ExampleComponent.test.tsx",
        EXAMPLE_COMPONENT_TEST_TSX,
    )
    write(
        components / "ExampleComponent" / "index.ts",
        "export { ExampleComponent } from './ExampleComponent';\n",
    )
    write(
        components / "ExampleFetchComponent" / "ExampleFetchComponent.tsx",
        textwrap.dedent(
            """\
            export const exampleUsers = { results: [] };
            export const ExampleFetchComponent = () => null;
            """
        ),
    )
    write(
        components / "ExampleFetchComponent" / "index.ts",
        "export { ExampleFetchComponent } from './ExampleFetchComponent';\n",
    )
    write(root / "dev" / "index.tsx", "createDevApp().registerPlugin(myServicePlugin).render();\n")
    return root


@pytest.fixture()
def backend_package(tmp_path: Path) -> Path:
    root = tmp_path / "plugins" / "example-backend"
    write_manifest(root, "example", role="backend-plugin")
    write(root / "src" / "plugin.ts", BACKEND_PLUGIN_TS)
    write(root / "src" / "router.ts", BACKEND_ROUTER_TS)
    write(root / "src" / "index.ts", "export { examplePlugin as default } from './plugin';\n")
    write(root / "src" / "plugin.test.ts", "import { examplePlugin } from './plugin';\n")
    write(root / "src" / "router.test.ts", "import { createRouter } from './router';\n")
    services = root / "src" / "services" / "TodoListService"
    write(services / "index.ts", "export { todoListServiceRef } from './createTodoListService';\n")
    write(services / "createTodoListService.ts", "export const todoListServiceRef = {};\n")
    write(services / "types.ts", "export interface TodoListService {}\n")
    write(root / "dev" / "index.ts", "const backend = createBackend();\n")
    return root
