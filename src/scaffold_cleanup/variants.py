"""Cleanup tables for the packages produced by the Backstage plugin generator.

Each variant is plain data handed to ``pipeline.run``; supporting another
generator template means adding a table here, not another executor.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from scaffold_cleanup.models import (
    PatchRule,
    PluginPackage,
    RemovalTarget,
    RenameOperation,
    RewriteRule,
    Substitution,
    Variant,
)
from scaffold_cleanup.naming import component_name

PLACEHOLDER_COMPONENT = "ExampleComponent"
BACKEND_ROLES = {"backend-plugin", "backend-plugin-module"}

HEALTH_ROUTER = """\
import { HttpAuthService } from '@backstage/backend-plugin-api';
import express from 'express';
import Router from 'express-promise-router';

export interface RouterOptions {
  httpAuth: HttpAuthService;
}

export async function createRouter(
  options: RouterOptions,
): Promise<express.Router> {
  const router = Router();
  router.use(express.json());

  // Mark options as used to satisfy TypeScript when no auth is wired yet
  void options;

  router.get('/health', (_req, res) => {
    res.json({ status: 'ok' });
  });

  return router;
}
"""


def _escape(replacement: str) -> str:
    return replacement.replace("\\", "\\\\")


def frontend_variant(package: PluginPackage) -> Variant:
    component = component_name(package.plugin_id)
    rename = RenameOperation(
        source=f"src/components/{PLACEHOLDER_COMPONENT}",
        placeholder=PLACEHOLDER_COMPONENT,
        content_rules=[
            Substitution(
                r"""import\s*\{\s*ExampleFetchComponent\s*\}\s*from\s*['"]\.\./ExampleFetchComponent['"];?[ \t]*\n?""",
                "",
            ),
            Substitution(
                r"\n?[ \t]*<Grid item>\s*<ExampleFetchComponent\s*/>\s*</Grid>[ \t]*(?=\n|$)",
                "",
            ),
        ],
        wiring_files=["src/plugin.ts"],
        wiring_rules=[
            Substitution(
                r"""import\(\s*['"]\./components/ExampleComponent['"]\s*\)""",
                _escape(f"import('./components/{component}')"),
            ),
            Substitution(
                r"(?<![\w$])m\.ExampleComponent(?![\w$])",
                _escape(f"m.{component}"),
            ),
        ],
    )
    return Variant(
        name="frontend",
        title="frontend plugin",
        removals=[
            RemovalTarget("src/components/ExampleFetchComponent", "mock data example"),
            RemovalTarget("dev", "local dev harness"),
            RemovalTarget("src/plugin.test.ts", "example test"),
        ],
        renames=[rename],
        changes=[
            "Removed ExampleFetchComponent and its mock data",
            "Renamed ExampleComponent -> {component}",
            "Updated imports and references in src/plugin.ts",
            "Removed dev/ and example tests",
        ],
        next_steps=[
            "Update src/plugin.ts to use the New Frontend System",
            "Customize the component in src/components/{component}/",
            "Follow the conversion steps in backstage-frontend-plugin/SKILL.md",
        ],
    )


def backend_variant(package: PluginPackage) -> Variant:
    return Variant(
        name="backend",
        title="backend plugin",
        removals=[
            RemovalTarget("src/services", "TodoListService example"),
            RemovalTarget("src/plugin.test.ts", "example test"),
            RemovalTarget("src/router.test.ts", "example test"),
            RemovalTarget("dev", "local dev harness"),
        ],
        patches=[
            PatchRule(
                "src/plugin.ts",
                Substitution(
                    r"""^import\s*\{\s*todoListServiceRef\s*\}\s*from\s*['"]\./services/TodoListService['"];?[ \t]*\n?""",
                    "",
                    flags=re.MULTILINE,
                ),
                "removed todoListServiceRef import",
            ),
            PatchRule(
                "src/plugin.ts",
                Substitution(
                    r"^[ \t]*todoList:\s*todoListServiceRef,?[ \t]*\n?",
                    "",
                    flags=re.MULTILINE,
                ),
                "removed todoList from deps",
            ),
            PatchRule(
                "src/plugin.ts",
                Substitution(r",?\s*todoList:\s*todoListServiceRef(?![\w$])", ""),
                "removed inline todoList dependency",
            ),
            PatchRule(
                "src/plugin.ts",
                Substitution(r"([{(]\s*)todoList\s*,\s*", r"\1"),
                "removed leading todoList parameter",
            ),
            PatchRule(
                "src/plugin.ts",
                Substitution(r",\s*todoList(?![\w$])", ""),
                "removed todoList parameter",
            ),
            PatchRule(
                "src/plugin.ts",
                Substitution(
                    r"await\s+createRouter\(\{\s*httpAuth,?\s*\}\)",
                    "await createRouter({ httpAuth })",
                ),
                "normalized createRouter call",
            ),
        ],
        rewrites=[
            RewriteRule("src/router.ts", HEALTH_ROUTER, "simple /health endpoint"),
        ],
        changes=[
            "Removed services/TodoListService.ts example code",
            "Simplified router.ts to just a /health endpoint",
            "Removed the todoList service from plugin.ts",
            "Removed example tests (plugin.test.ts, router.test.ts)",
            "Removed dev/ directory",
        ],
        next_steps=[
            "Add your own routes in src/router.ts",
            "Create services if needed in src/services/",
            "Follow backstage-backend-plugin/SKILL.md for best practices",
            "Test with: curl http://localhost:7007/api/{plugin_id}/health",
        ],
    )


VARIANTS: dict[str, Callable[[PluginPackage], Variant]] = {
    "frontend": frontend_variant,
    "backend": backend_variant,
}


def detect_variant(package: PluginPackage) -> str:
    if package.role in BACKEND_ROLES:
        return "backend"
    return "frontend"


def get_variant(name: str, package: PluginPackage) -> Variant:
    if name == "auto":
        name = detect_variant(package)
    try:
        factory = VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown variant: {name}") from None
    return factory(package)
