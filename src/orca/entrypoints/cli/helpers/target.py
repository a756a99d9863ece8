"""Resolution of ``module:attribute`` dispatcher targets.

A target names the module holding an application's registrations and the
attribute bound to its `Dispatcher`, e.g. ``myapp.hooks:dispatcher``. The
attribute may be dotted and defaults to ``dispatcher``.
"""

import importlib
import logging
import operator

import click

from orca.dispatcher import Dispatcher
from orca.domain.errors import TargetLoadError

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "dispatcher"


def load_dispatcher(target: str) -> Dispatcher:
    """Import ``target`` and return the dispatcher it names.

    Args:
        target: ``module`` or ``module:attribute``.

    Returns:
        The dispatcher bound to the attribute.

    Raises:
        TargetLoadError: If the module cannot be imported, the attribute is
            missing, or it is not a `Dispatcher`.
    """
    module_name, _, attribute = target.partition(":")
    attribute = attribute or DEFAULT_ATTRIBUTE
    if not module_name:
        raise TargetLoadError(target, "missing module name")

    logger.debug("Loading dispatcher %s from module %s", attribute, module_name)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetLoadError(target, str(e)) from e

    try:
        obj = operator.attrgetter(attribute)(module)
    except AttributeError as e:
        raise TargetLoadError(
            target, f"module '{module_name}' has no attribute '{attribute}'"
        ) from e

    if not isinstance(obj, Dispatcher):
        raise TargetLoadError(
            target, f"'{attribute}' is a {type(obj).__name__}, not a Dispatcher"
        )
    return obj


def parse_target(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str,
) -> Dispatcher:
    """Click callback turning a target string into its dispatcher.

    Raises:
        click.BadParameter: If the target cannot be loaded.
    """
    try:
        return load_dispatcher(value)
    except TargetLoadError as e:
        raise click.BadParameter(str(e)) from e
