"""Tests for extension activation."""

import logging

import pytest

from sigma_example import activate, deactivate
from sigma_example.extension import COMMAND_SPECS, MENU_ITEMS
from sigma_example.models import Entry, MenuContext


@pytest.mark.asyncio
async def test_activate_registers_everything(sigma, settings) -> None:
    activation = await activate(sigma, settings)

    assert set(sigma.context_menu.items) == {
        "say-hello",
        "count-selected",
        "file-info",
        "copy-path",
        "quick-view-file",
        "analyze-file",
    }
    assert set(sigma.commands.commands) == {
        "greet",
        "show-info",
        "show-settings",
        "show-context",
        "open-file-dialog",
        "list-builtin-commands",
        "demo-progress",
        "runtime-eval",
        "runtime-system-info",
        "json-tools",
    }
    assert len(activation.disposables) == len(MENU_ITEMS) + len(COMMAND_SPECS) + 1


@pytest.mark.asyncio
async def test_deactivate_removes_registrations(sigma, settings) -> None:
    activation = await activate(sigma, settings)

    await deactivate(activation)

    assert sigma.context_menu.items == {}
    assert sigma.commands.commands == {}
    assert activation.disposables == []


@pytest.mark.asyncio
async def test_registered_command_runs_through_host(sigma, settings) -> None:
    await activate(sigma, settings)

    await sigma.commands.execute_command("greet", {"name": "Ada"})

    assert sigma.ui.notifications[-1].message == "Hello, Ada! Nice to see you!"


@pytest.mark.asyncio
async def test_menu_visibility_for_single_file(sigma, settings) -> None:
    await activate(sigma, settings)
    context = MenuContext(
        selected_entries=[Entry(name="a.txt", path="/home/user/a.txt", extension="txt")]
    )

    visible = [item.id for item in sigma.context_menu.visible_items(context)]

    assert visible == [
        "say-hello",
        "file-info",
        "copy-path",
        "quick-view-file",
        "analyze-file",
    ]


@pytest.mark.asyncio
async def test_show_notifications_change_is_logged(
    sigma, settings, caplog: pytest.LogCaptureFixture
) -> None:
    await activate(sigma, settings)

    with caplog.at_level(logging.INFO, logger="sigma_example"):
        sigma.settings.set("showNotifications", False)

    assert "showNotifications changed from True to False" in caplog.text


def test_greet_arguments() -> None:
    greet = next(spec for spec in COMMAND_SPECS if spec.id == "greet")

    assert [a.name for a in greet.arguments] == ["name", "style"]
    assert greet.arguments[0].required is True
    assert [value for _, value in greet.arguments[1].data] == ["friendly", "formal", "casual"]
