# ==============================================
# Tests for project labels
# ==============================================

import asyncio
import uuid

import pytest

from projectstore import store
from projectstore.services.errors import ProjectNotFoundError


def uid() -> str:
    return str(uuid.uuid4())


async def create_project_with_labels(userid, classid, labels):
    project = await store.store_project(userid, classid, "text", uid(), "en", [], False)
    for label in labels:
        await store.add_label_to_project(userid, classid, project.id, label)
    return project


class TestAddLabelToProject:

    @pytest.mark.asyncio
    async def test_non_existent_project(self, db, classid):
        with pytest.raises(ProjectNotFoundError) as excinfo:
            await store.add_label_to_project(uid(), classid, "text", "MYNEWLABEL")
        assert excinfo.value.message == "Project not found"
        assert excinfo.value.status_code == 404

    @pytest.mark.asyncio
    async def test_add_labels(self, db, userid, classid):
        project = await store.store_project(userid, classid, "text", uid(), "en", [], False)
        assert (await store.get_project(project.id)).labels == []

        label1, label2 = uid(), uid()
        assert await store.add_label_to_project(userid, classid, project.id, label1) == [label1]
        assert (await store.get_project(project.id)).labels == [label1]

        assert await store.add_label_to_project(userid, classid, project.id, label2) == [label1, label2]
        assert (await store.get_project(project.id)).labels == [label1, label2]

    @pytest.mark.asyncio
    async def test_no_duplicate_labels(self, db, userid, classid):
        project = await store.store_project(userid, classid, "text", uid(), "en", [], False)
        label = uid()

        first = await store.add_label_to_project(userid, classid, project.id, label)
        second = await store.add_label_to_project(userid, classid, project.id, label)
        assert first == second == [label]
        assert (await store.get_project(project.id)).labels == [label]

    @pytest.mark.asyncio
    async def test_labels_are_trimmed(self, db, userid, classid):
        project = await store.store_project(userid, classid, "text", uid(), "en", [], False)

        assert await store.add_label_to_project(userid, classid, project.id, "  cat ") == ["cat"]
        assert await store.add_label_to_project(userid, classid, project.id, "cat") == ["cat"]

    @pytest.mark.asyncio
    async def test_labels_are_case_sensitive(self, db, userid, classid):
        project = await create_project_with_labels(userid, classid, ["cat", "Cat"])
        assert (await store.get_project(project.id)).labels == ["cat", "Cat"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("label", ["", "   ", None])
    async def test_no_empty_labels(self, db, userid, classid, label):
        project = await create_project_with_labels(userid, classid, ["dog"])

        assert await store.add_label_to_project(userid, classid, project.id, label) == ["dog"]
        assert (await store.get_project(project.id)).labels == ["dog"]

    @pytest.mark.asyncio
    async def test_empty_label_on_missing_project(self, db, userid, classid):
        with pytest.raises(ProjectNotFoundError):
            await store.add_label_to_project(userid, classid, uid(), "")

    @pytest.mark.asyncio
    async def test_other_users_project_is_not_found(self, db, userid, classid):
        project = await store.store_project(userid, classid, "text", uid(), "en", [], False)

        with pytest.raises(ProjectNotFoundError):
            await store.add_label_to_project(uid(), classid, project.id, "intruder")
        with pytest.raises(ProjectNotFoundError):
            await store.add_label_to_project(userid, uid(), project.id, "intruder")
        assert (await store.get_project(project.id)).labels == []

    @pytest.mark.asyncio
    async def test_concurrent_adds_keep_every_label(self, db, userid, classid):
        project = await store.store_project(userid, classid, "text", uid(), "en", [], False)
        labels = [f"label{i}" for i in range(20)]

        await asyncio.gather(*[
            store.add_label_to_project(userid, classid, project.id, label) for label in labels + labels
        ])

        stored = (await store.get_project(project.id)).labels
        assert sorted(stored) == sorted(labels)


class TestRemoveLabelFromProject:

    @pytest.mark.asyncio
    async def test_non_existent_project(self, db, classid):
        with pytest.raises(ProjectNotFoundError) as excinfo:
            await store.remove_label_from_project(uid(), classid, "text", "MYOLDLABEL")
        assert str(excinfo.value) == "Project not found"

    @pytest.mark.asyncio
    async def test_remove_label_from_text_project(self, db, userid, classid):
        project = await create_project_with_labels(userid, classid, ["america", "belgium", "canada", "denmark"])

        await store.store_text_training(project.id, "aalborg", "denmark")
        await store.store_text_training(project.id, "kolding", "denmark")
        await store.store_text_training(project.id, "montreal", "canada")
        await store.store_text_training(project.id, "mons", "belgium")
        await store.store_text_training(project.id, "ostend", "belgium")
        await store.store_text_training(project.id, "brussels", "belgium")

        project = await store.get_project(project.id)
        assert await store.count_training_by_label(project) == {"belgium": 3, "canada": 1, "denmark": 2}

        new_labels = await store.remove_label_from_project(userid, classid, project.id, "belgium")
        assert new_labels == ["america", "canada", "denmark"]

        project = await store.get_project(project.id)
        assert project.labels == ["america", "canada", "denmark"]
        assert await store.count_training_by_label(project) == {"canada": 1, "denmark": 2}

        # the examples themselves are untouched
        assert await store.count_training(project) == 6

    @pytest.mark.asyncio
    async def test_label_not_in_project(self, db, userid, classid):
        labels = ["hampshire", "berkshire", "wiltshire", "sussex"]
        project = await create_project_with_labels(userid, classid, labels)

        assert await store.remove_label_from_project(userid, classid, project.id, "london") == labels
        assert (await store.get_project(project.id)).labels == labels

    @pytest.mark.asyncio
    async def test_empty_label(self, db, userid, classid):
        labels = ["hampshire", "berkshire", "wiltshire", "sussex"]
        project = await create_project_with_labels(userid, classid, labels)

        assert await store.remove_label_from_project(userid, classid, project.id, "") == labels
        assert (await store.get_project(project.id)).labels == labels

    @pytest.mark.asyncio
    async def test_remove_all_labels(self, db, userid, classid):
        project = await create_project_with_labels(userid, classid, ["one", "two"])

        assert await store.remove_label_from_project(userid, classid, project.id, "one") == ["two"]
        assert await store.remove_label_from_project(userid, classid, project.id, "two") == []


class TestCountTrainingByLabel:

    @pytest.mark.asyncio
    async def test_no_labels(self, db, userid, classid):
        project = await store.store_project(userid, classid, "text", uid(), "en", [], False)
        await store.store_text_training(project.id, "orphan", "unassigned")

        assert await store.count_training_by_label(project) == {}

    @pytest.mark.asyncio
    async def test_unused_labels_are_left_out(self, db, userid, classid):
        project = await create_project_with_labels(userid, classid, ["used", "unused"])
        await store.store_text_training(project.id, "something", "used")

        project = await store.get_project(project.id)
        assert await store.count_training_by_label(project) == {"used": 1}

    @pytest.mark.asyncio
    async def test_counts_numbers_project(self, db, userid, classid):
        project = await store.store_project(
            userid, classid, "numbers", uid(), "en", [{"name": "x", "type": "number"}], False,
        )
        await store.add_label_to_project(userid, classid, project.id, "big")
        await store.add_label_to_project(userid, classid, project.id, "small")
        await store.store_number_training(project.id, [100], "big")
        await store.store_number_training(project.id, [200], "big")
        await store.store_number_training(project.id, [1], "small")

        project = await store.get_project(project.id)
        assert await store.count_training_by_label(project) == {"big": 2, "small": 1}
