"""
Commander Backend — Command Service Unit Tests
==============================================

What:  CommandService logic against a mock repository (no database, no HTTP).

What we test:
    ✅ Reads map entities to CommandRead; missing ids raise NotFoundError
    ✅ Writes stage through the repository and commit once
    ✅ A failed commit raises PersistenceError
    ✅ JSON Patch: applied, validated, merged; failures leave the entity unchanged
"""

import pytest

from commander.exceptions import NotFoundError, PersistenceError, ValidationError
from commander.models.command import Command
from commander.schemas.command import CommandCreate, CommandUpdate
from commander.services.command_service import PATCH_ERROR_KEY, CommandService, field_errors


class TestCommandServiceRead:

    def setup_method(self):
        self.service = CommandService()

    @pytest.mark.asyncio
    async def test_list_commands(self, mock_repository, sample_command):
        """Entities are mapped to CommandRead in repository order."""
        mock_repository.get_all_commands.return_value = [sample_command]

        result = await self.service.list_commands(mock_repository)

        assert len(result) == 1
        assert result[0].id == 1
        assert result[0].line == "ls -la"

    @pytest.mark.asyncio
    async def test_list_commands_empty(self, mock_repository):
        """An empty store lists as an empty list."""
        assert await self.service.list_commands(mock_repository) == []

    @pytest.mark.asyncio
    async def test_get_command_found(self, mock_repository, sample_command):
        """An existing id returns its CommandRead."""
        mock_repository.get_command_by_id.return_value = sample_command

        result = await self.service.get_command(mock_repository, 1)

        assert result.how_to == "list files"
        mock_repository.get_command_by_id.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_get_command_not_found(self, mock_repository):
        """A missing id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await self.service.get_command(mock_repository, 7)


class TestCommandServiceWrite:

    def setup_method(self):
        self.service = CommandService()

    @pytest.mark.asyncio
    async def test_create_command(self, mock_repository):
        """Create stages the entity, commits once and returns the assigned id."""
        async def assign_id(command):
            command.id = 12

        mock_repository.create_command.side_effect = assign_id
        dto = CommandCreate(how_to="list files", line="ls -la", platform="linux")

        result = await self.service.create_command(mock_repository, dto)

        assert result.id == 12
        assert result.platform == "linux"
        mock_repository.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_command_commit_failure(self, mock_repository):
        """A commit that reports False raises PersistenceError."""
        mock_repository.save_changes.return_value = False
        dto = CommandCreate(how_to="list files", line="ls -la", platform="linux")

        with pytest.raises(PersistenceError):
            await self.service.create_command(mock_repository, dto)

    @pytest.mark.asyncio
    async def test_update_command(self, mock_repository, sample_command):
        """PUT overwrites every field and keeps the id."""
        mock_repository.get_command_by_id.return_value = sample_command
        dto = CommandUpdate(how_to="list all", line="ls -A", platform="macos")

        await self.service.update_command(mock_repository, 1, dto)

        assert sample_command.id == 1
        assert sample_command.line == "ls -A"
        mock_repository.update_command.assert_awaited_once_with(sample_command)
        mock_repository.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_missing_does_not_create(self, mock_repository):
        """Updating a missing id never falls back to create."""
        dto = CommandUpdate(how_to="list all", line="ls -A", platform="macos")

        with pytest.raises(NotFoundError):
            await self.service.update_command(mock_repository, 5, dto)

        mock_repository.create_command.assert_not_awaited()
        mock_repository.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_command(self, mock_repository, sample_command):
        """Delete removes the fetched entity and commits."""
        mock_repository.get_command_by_id.return_value = sample_command

        await self.service.delete_command(mock_repository, 1)

        mock_repository.delete_command.assert_awaited_once_with(sample_command)
        mock_repository.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_repository):
        """Deleting a missing id raises before touching the repository."""
        with pytest.raises(NotFoundError):
            await self.service.delete_command(mock_repository, 5)

        mock_repository.delete_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_commit_failure(self, mock_repository, sample_command):
        """A failed commit on delete raises PersistenceError."""
        mock_repository.get_command_by_id.return_value = sample_command
        mock_repository.save_changes.return_value = False

        with pytest.raises(PersistenceError):
            await self.service.delete_command(mock_repository, 1)


class TestCommandServicePatch:

    def setup_method(self):
        self.service = CommandService()

    @pytest.mark.asyncio
    async def test_replace_line(self, mock_repository, sample_command):
        """A replace touches only the targeted field."""
        mock_repository.get_command_by_id.return_value = sample_command

        await self.service.patch_command(
            mock_repository, 1, [{"op": "replace", "path": "/line", "value": "ls -la --color"}]
        )

        assert sample_command.line == "ls -la --color"
        assert sample_command.how_to == "list files"
        assert sample_command.platform == "linux"
        mock_repository.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_copy_then_test(self, mock_repository):
        """Later operations see the result of earlier ones."""
        command = Command(id=3, how_to="show path", line="echo $PATH", platform="bash")
        mock_repository.get_command_by_id.return_value = command

        await self.service.patch_command(
            mock_repository,
            3,
            [
                {"op": "copy", "from": "/platform", "path": "/howTo"},
                {"op": "test", "path": "/howTo", "value": "bash"},
            ],
        )

        assert command.how_to == "bash"
        assert command.platform == "bash"

    @pytest.mark.asyncio
    async def test_move_then_add(self, mock_repository, sample_command):
        """Move line into howTo, then add a new line; id and platform stay put."""
        mock_repository.get_command_by_id.return_value = sample_command

        await self.service.patch_command(
            mock_repository,
            1,
            [
                {"op": "move", "from": "/line", "path": "/howTo"},
                {"op": "add", "path": "/line", "value": "ls"},
            ],
        )

        assert sample_command.how_to == "ls -la"
        assert sample_command.line == "ls"
        assert sample_command.platform == "linux"
        assert sample_command.id == 1
        mock_repository.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bare_move_leaves_line_missing(self, mock_repository, sample_command):
        """A move that empties line is rejected and the entity is untouched."""
        mock_repository.get_command_by_id.return_value = sample_command

        with pytest.raises(ValidationError) as exc_info:
            await self.service.patch_command(
                mock_repository, 1, [{"op": "move", "from": "/line", "path": "/howTo"}]
            )

        assert exc_info.value.errors == {"line": ["The line field is required."]}
        assert sample_command.how_to == "list files"
        assert sample_command.line == "ls -la"
        mock_repository.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_how_to_is_rejected(self, mock_repository, sample_command):
        """An empty howTo fails validation and nothing is saved."""
        mock_repository.get_command_by_id.return_value = sample_command

        with pytest.raises(ValidationError) as exc_info:
            await self.service.patch_command(
                mock_repository, 1, [{"op": "replace", "path": "/howTo", "value": ""}]
            )

        assert "howTo" in exc_info.value.errors
        assert sample_command.how_to == "list files"
        mock_repository.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remove_required_field(self, mock_repository, sample_command):
        """Removing a required member reports it as required."""
        mock_repository.get_command_by_id.return_value = sample_command

        with pytest.raises(ValidationError) as exc_info:
            await self.service.patch_command(
                mock_repository, 1, [{"op": "remove", "path": "/platform"}]
            )

        assert exc_info.value.errors == {"platform": ["The platform field is required."]}
        assert sample_command.platform == "linux"

    @pytest.mark.asyncio
    async def test_unknown_member_is_rejected(self, mock_repository, sample_command):
        """Adding /id is rejected; the id cannot be patched."""
        mock_repository.get_command_by_id.return_value = sample_command

        with pytest.raises(ValidationError) as exc_info:
            await self.service.patch_command(
                mock_repository, 1, [{"op": "add", "path": "/id", "value": 500}]
            )

        assert "id" in exc_info.value.errors
        assert sample_command.id == 1

    @pytest.mark.asyncio
    async def test_missing_path_is_rejected(self, mock_repository, sample_command):
        """Replacing a member that does not exist is a patch error."""
        mock_repository.get_command_by_id.return_value = sample_command

        with pytest.raises(ValidationError) as exc_info:
            await self.service.patch_command(
                mock_repository, 1, [{"op": "replace", "path": "/shell", "value": "zsh"}]
            )

        assert PATCH_ERROR_KEY in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_failed_test_operation(self, mock_repository, sample_command):
        """A failing test op aborts the whole document."""
        mock_repository.get_command_by_id.return_value = sample_command

        with pytest.raises(ValidationError) as exc_info:
            await self.service.patch_command(
                mock_repository,
                1,
                [
                    {"op": "test", "path": "/platform", "value": "windows"},
                    {"op": "replace", "path": "/line", "value": "dir"},
                ],
            )

        assert PATCH_ERROR_KEY in exc_info.value.errors
        assert sample_command.line == "ls -la"

    @pytest.mark.asyncio
    async def test_patch_missing_command(self, mock_repository):
        """Patching a missing id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await self.service.patch_command(
                mock_repository, 9, [{"op": "replace", "path": "/line", "value": "ls"}]
            )


class TestFieldErrors:

    def test_body_prefix_is_dropped(self):
        """The body location prefix is stripped from error keys."""
        errors = field_errors([
            {"type": "missing", "loc": ("body", "howTo"), "msg": "Field required"},
        ])

        assert errors == {"howTo": ["The howTo field is required."]}

    def test_too_long(self):
        """Over-long strings report the maximum length."""
        errors = field_errors([
            {"type": "string_too_long", "loc": ("howTo",), "msg": "too long", "ctx": {"max_length": 250}},
        ])

        assert errors == {"howTo": ["The field howTo must be a string with a maximum length of 250."]}

    def test_other_errors_keep_message(self):
        """Unrecognised error types keep pydantic's message."""
        errors = field_errors([
            {"type": "int_parsing", "loc": ("path", "command_id"), "msg": "Input should be a valid integer"},
        ])

        assert errors == {"command_id": ["Input should be a valid integer"]}
