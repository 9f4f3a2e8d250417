"""Variant registry.

Static lookup table from a (framework, language) pair to everything the
pipeline needs: the ``create vite`` template, the router package, the folder
layout, and the styling/routing injection plans with their payload text.
No behaviour beyond exact-key lookup lives here.
"""

from __future__ import annotations

from .errors import UnknownVariant
from .models import (
    FolderSpec,
    Framework,
    InjectionPlan,
    InsertionRule,
    Language,
    PatchDescriptor,
    SupportFile,
    Variant,
    VariantConfig,
)


# ---------------------------------------------------------------------------
# Shared data
# ---------------------------------------------------------------------------

FOLDER_DESCRIPTIONS: dict[str, str] = {
    "components": "Reusable UI components",
    "pages": "Page components",
    "views": "Vue page views",
    "routes": "Svelte routes",
    "hooks": "Custom React hooks",
    "composables": "Vue composables",
    "stores": "State management",
    "utils": "Utility functions",
    "services": "API services",
    "lib": "Library code",
    "assets": "Static files",
    "router": "Routing configuration",
}

_FOLDERS: dict[Framework, tuple[str, ...]] = {
    Framework.REACT: ("components", "pages", "hooks", "utils", "assets", "services", "router"),
    Framework.VUE: ("components", "views", "composables", "stores", "assets", "utils", "router"),
    Framework.SVELTE: ("components", "routes", "stores", "lib", "assets", "utils"),
}

_ROUTER_PACKAGES: dict[Framework, str] = {
    Framework.REACT: "react-router-dom",
    Framework.VUE: "vue-router",
    Framework.SVELTE: "svelte-spa-router",
}

_DISPLAY_NAMES: dict[Framework, str] = {
    Framework.REACT: "React",
    Framework.VUE: "Vue",
    Framework.SVELTE: "Svelte",
}

_DOCS_URLS: dict[Framework, str] = {
    Framework.REACT: "https://react.dev",
    Framework.VUE: "https://vuejs.org",
    Framework.SVELTE: "https://svelte.dev",
}

# Default stylesheet written by each create-vite template.
_STYLESHEETS: dict[Framework, str] = {
    Framework.REACT: "src/index.css",
    Framework.VUE: "src/style.css",
    Framework.SVELTE: "src/app.css",
}

_ALL_STYLESHEETS = ("src/index.css", "src/style.css", "src/app.css")

TAILWIND_PACKAGES = ("tailwindcss", "@tailwindcss/vite")
TAILWIND_IMPORT = "import tailwindcss from '@tailwindcss/vite'"
TAILWIND_PLUGIN = "tailwindcss()"
TAILWIND_CSS_IMPORT = '@import "tailwindcss";'

PLUGINS_ARRAY_PATTERN = r"plugins:\s*\["


# ---------------------------------------------------------------------------
# Plan builders
# ---------------------------------------------------------------------------

def _template_id(framework: Framework, language: Language) -> str:
    return framework.value if language is Language.JS else f"{framework.value}-ts"


def _script_extension(framework: Framework, language: Language) -> str:
    if framework is Framework.REACT:
        return "tsx" if language is Language.TS else "jsx"
    return language.value


def _build_config_candidates(language: Language) -> tuple[str, ...]:
    if language is Language.TS:
        return ("vite.config.ts", "vite.config.js")
    return ("vite.config.js", "vite.config.ts")


def _styling_plan(framework: Framework, language: Language) -> InjectionPlan:
    config_files = _build_config_candidates(language)
    own_stylesheet = _STYLESHEETS[framework]
    stylesheets = (own_stylesheet,) + tuple(s for s in _ALL_STYLESHEETS if s != own_stylesheet)
    return InjectionPlan(
        name="styling",
        packages=TAILWIND_PACKAGES,
        dev=True,
        patches=(
            PatchDescriptor(
                target_file_candidates=config_files,
                idempotence_marker=TAILWIND_IMPORT,
                rule=InsertionRule.AFTER_LAST_IMPORT,
                payload=TAILWIND_IMPORT,
            ),
            PatchDescriptor(
                target_file_candidates=config_files,
                idempotence_marker=TAILWIND_PLUGIN,
                rule=InsertionRule.AFTER_FIRST_PATTERN,
                payload=f"{TAILWIND_PLUGIN},",
                pattern=PLUGINS_ARRAY_PATTERN,
            ),
            PatchDescriptor(
                target_file_candidates=stylesheets,
                idempotence_marker=TAILWIND_CSS_IMPORT,
                rule=InsertionRule.APPEND_AT_TOP,
                payload=TAILWIND_CSS_IMPORT,
                primary=False,
            ),
        ),
    )


def _routing_plan(framework: Framework, language: Language, ext: str) -> InjectionPlan:
    entry = (f"src/main.{ext}",)
    package = (_ROUTER_PACKAGES[framework],)

    if framework is Framework.REACT:
        return InjectionPlan(
            name="routing",
            packages=package,
            support_files=(SupportFile(f"src/router/index.{ext}", "router/react_router.j2"),),
            patches=(
                PatchDescriptor(
                    target_file_candidates=entry,
                    idempotence_marker="import { router } from './router'",
                    rule=InsertionRule.REPLACE_FIRST_PATTERN,
                    payload=(
                        "import { RouterProvider } from 'react-router-dom'\n"
                        "import { router } from './router'"
                    ),
                    pattern=r"import App from ['\"]\./App(?:\.[jt]sx)?['\"];?",
                ),
                PatchDescriptor(
                    target_file_candidates=entry,
                    idempotence_marker="<RouterProvider",
                    rule=InsertionRule.REPLACE_FIRST_PATTERN,
                    payload="<RouterProvider router={router} />",
                    pattern=r"<App\s*/>",
                ),
            ),
        )

    if framework is Framework.VUE:
        return InjectionPlan(
            name="routing",
            packages=package,
            support_files=(SupportFile(f"src/router/index.{ext}", "router/vue_router.j2"),),
            patches=(
                PatchDescriptor(
                    target_file_candidates=entry,
                    idempotence_marker="import router from './router'",
                    rule=InsertionRule.REPLACE_FIRST_PATTERN,
                    payload=(
                        "import { RouterView } from 'vue-router'\n"
                        "import router from './router'"
                    ),
                    pattern=r"import App from ['\"]\./App\.vue['\"];?",
                ),
                PatchDescriptor(
                    target_file_candidates=entry,
                    idempotence_marker=".use(router)",
                    rule=InsertionRule.REPLACE_FIRST_PATTERN,
                    payload="createApp(RouterView).use(router)",
                    pattern=r"createApp\(App\)",
                ),
            ),
        )

    return InjectionPlan(
        name="routing",
        packages=package,
        support_files=(SupportFile("src/router/Router.svelte", "router/svelte_router.j2"),),
        patches=(
            PatchDescriptor(
                target_file_candidates=entry,
                idempotence_marker="import Router from './router/Router.svelte'",
                rule=InsertionRule.REPLACE_FIRST_PATTERN,
                payload="import Router from './router/Router.svelte'",
                pattern=r"import App from ['\"]\./App\.svelte['\"];?",
            ),
            PatchDescriptor(
                target_file_candidates=entry,
                idempotence_marker="mount(Router,",
                rule=InsertionRule.REPLACE_FIRST_PATTERN,
                payload="mount(Router,",
                pattern=r"mount\(App,",
            ),
        ),
    )


def _root_component(framework: Framework, ext: str) -> str:
    if framework is Framework.VUE:
        return "src/App.vue"
    if framework is Framework.SVELTE:
        return "src/App.svelte"
    return f"src/App.{ext}"


def _build_entry(framework: Framework, language: Language) -> VariantConfig:
    ext = _script_extension(framework, language)
    stylesheet = _STYLESHEETS[framework]
    return VariantConfig(
        variant=Variant(
            framework=framework,
            language=language,
            template_id=_template_id(framework, language),
            file_extension=ext,
        ),
        display_name=_DISPLAY_NAMES[framework],
        router_package=_ROUTER_PACKAGES[framework],
        folders=tuple(
            FolderSpec(relative_path=f"src/{name}", description=FOLDER_DESCRIPTIONS[name])
            for name in _FOLDERS[framework]
        ),
        styling=_styling_plan(framework, language),
        routing=_routing_plan(framework, language, ext),
        entry_point=f"src/main.{ext}",
        root_component=_root_component(framework, ext),
        stylesheet_candidates=(stylesheet,) + tuple(s for s in _ALL_STYLESHEETS if s != stylesheet),
        docs_url=_DOCS_URLS[framework],
    )


# Menu order of the interactive prompt.
_REGISTRY: dict[tuple[str, str], VariantConfig] = {
    (fw.value, lang.value): _build_entry(fw, lang)
    for fw, lang in (
        (Framework.REACT, Language.JS),
        (Framework.REACT, Language.TS),
        (Framework.VUE, Language.TS),
        (Framework.VUE, Language.JS),
        (Framework.SVELTE, Language.TS),
        (Framework.SVELTE, Language.JS),
    )
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def lookup(framework: str, language: str) -> VariantConfig:
    """Return the registry entry for *framework* + *language*.

    Raises:
        UnknownVariant: If the pair is not one of the six supported stacks.
    """
    key = (_normalize(framework), _normalize(language))
    try:
        return _REGISTRY[key]
    except KeyError:
        raise UnknownVariant(framework, language) from None


def supported_variants() -> list[tuple[str, str]]:
    """Return every supported ``(framework, language)`` pair in menu order."""
    return list(_REGISTRY)


def _normalize(value: object) -> str:
    # Accept both plain strings and the Framework/Language enums.
    raw = value.value if isinstance(value, (Framework, Language)) else value
    return str(raw).strip().lower()


def parse_stack(stack: str) -> tuple[str, str]:
    """Split a ``framework-language`` shorthand such as ``vue-ts``.

    A bare framework name defaults to TypeScript.  The pair is not checked
    against the registry here; :func:`lookup` does that.
    """
    framework, _, language = stack.strip().lower().partition("-")
    return framework, language or Language.TS.value
