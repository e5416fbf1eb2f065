import json

from basket.domain.ArchiveEntry import ArchiveEntry
from basket.domain.Recipe import Recipe
from basket.infra.backup import BackupManager
from basket.infra.storage import Storage
from basket.tests.samples import sample_list, sample_recipe_dict


def test_missing_records_load_as_defaults(storage):
    assert storage.load_shopping_list() is None
    assert storage.load_archive() == []
    assert storage.load_recipes() == []


def test_corrupt_record_loads_as_default(tmp_path):
    (tmp_path / "archive.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "shopping_list.json").write_text("[1, 2]", encoding="utf-8")
    storage = Storage(tmp_path, backup_on_save=False)
    assert storage.load_archive() == []
    assert storage.load_shopping_list() is None


def test_invalid_utf8_loads_as_default(tmp_path):
    (tmp_path / "archive.json").write_bytes(b'[{"storeName": "\xff\xfe"}]')
    (tmp_path / "recipes.json").write_bytes(b"\xff\xfe\x00")
    storage = Storage(tmp_path, backup_on_save=False)
    assert storage.load_archive() == []
    assert storage.load_recipes() == []


def test_shopping_list_round_trip_keeps_meta(storage):
    shopping_list = sample_list()
    shopping_list.items[0].extra["recipeId"] = "r1"
    assert storage.save_shopping_list(shopping_list).success
    loaded = storage.load_shopping_list()
    assert loaded.meta == {"createdAt": "2024-01-04"}
    assert loaded.items[0].extra == {"recipeId": "r1"}
    assert [i.name for i in loaded.items] == ["Milch", "Mehl", "Salz"]


def test_clear_shopping_list(storage):
    storage.save_shopping_list(sample_list())
    assert storage.clear_shopping_list().success
    assert storage.load_shopping_list() is None
    # clearing twice is fine
    assert storage.clear_shopping_list().success


def test_save_writes_json(tmp_path):
    storage = Storage(tmp_path, backup_on_save=False)
    storage.save_recipes([Recipe.from_dict(sample_recipe_dict())])
    with open(tmp_path / "recipes.json", encoding="utf-8") as f:
        data = json.load(f)
    assert data[0]["name"] == "Pfannkuchen"
    # no temp files left behind
    assert sorted(p.name for p in tmp_path.iterdir()) == ["recipes.json"]


def test_unwritable_data_dir_reports_failure(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    storage = Storage(blocker, backup_on_save=False)
    result = storage.save_archive([])
    assert not result.success
    assert result.error


def test_backup_before_overwrite(tmp_path):
    storage = Storage(tmp_path, backup_on_save=True)
    entry = ArchiveEntry("a1", "Rewe", 10.0, "2024-01-05")
    storage.save_archive([entry])
    # nothing to back up on the first write
    assert storage.backups.list_backups("archive.json") == []
    storage.save_archive([entry, ArchiveEntry("a2", "Aldi", 5.0, "2024-01-06")])
    backups = storage.backups.list_backups("archive.json")
    assert len(backups) == 1
    assert backups[0]["name"].startswith("archive_")


def test_backup_cleanup_keeps_newest(tmp_path):
    (tmp_path / "recipes.json").write_text("[]", encoding="utf-8")
    manager = BackupManager(tmp_path, keep=2)
    for _ in range(4):
        assert manager.create_backup("recipes.json")
    assert len(manager.list_backups("recipes.json")) == 2
    assert manager.create_backup("missing.json") is False
