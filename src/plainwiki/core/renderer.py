"""HTML rendering for wiki pages.

Templates are loaded once at startup. A configured template directory takes
precedence over the templates bundled with the package.
"""

from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from plainwiki.core.pages import IndexPage, Page

INDEX_TEMPLATE = "index.html"
VIEW_TEMPLATE = "view.html"
EDIT_TEMPLATE = "edit.html"


class Renderer:
    """Renders pages and the index through Jinja2 templates.

    Template errors (including a missing template) propagate as
    ``jinja2.TemplateError``.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize renderer.

        Args:
            template_dir: Directory searched before the bundled templates
        """
        self._template_dir = template_dir

        loaders = []
        if template_dir is not None:
            loaders.append(FileSystemLoader(str(template_dir)))
        loaders.append(PackageLoader("plainwiki", "templates"))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html"]),
        )

    @property
    def template_dir(self) -> Path | None:
        return self._template_dir

    def render(self, name: str, **context: object) -> str:
        template = self._env.get_template(name)
        return template.render(**context)

    def render_index(self, index: IndexPage) -> str:
        return self.render(INDEX_TEMPLATE, title=index.title, titles=index.titles)

    def render_view(self, page: Page) -> str:
        return self.render(VIEW_TEMPLATE, title=page.title, body=page.text)

    def render_edit(self, page: Page) -> str:
        return self.render(EDIT_TEMPLATE, title=page.title, body=page.text)
