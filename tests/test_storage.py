"""
Tests para los helpers de almacenamiento.
Finalidad: Verificar el nombre hasheado, la validación de extensiones y el listado ordenado.
"""

import hashlib
from pathlib import Path

import pytest

from api.domain.file_models import FileInfo, StorageSettings
from api.services.storage import (
    create_dir_and_save,
    dump_file_list,
    hash_image_name,
    list_entries,
    remove_entry,
    split_file_name,
    validate_img,
)
from common.paths import PORT


def test_hash_image_name_depends_only_on_basename():
    """
    Objetivo: El nombre guardado es sha256(base) + "." + extensión, sin mirar el contenido.
    """
    expected = hashlib.sha256(b"foo").hexdigest()
    assert hash_image_name("foo", "png") == expected + ".png"
    assert hash_image_name("foo", "svg") == expected + ".svg"


@pytest.mark.parametrize("ext", ["jpg", "jpeg", "png", "svg"])
def test_validate_img_accepts_images(ext):
    assert validate_img(ext)


@pytest.mark.parametrize("ext", ["gif", "PNG", "Jpg", "", "png "])
def test_validate_img_rejects_others(ext):
    assert not validate_img(ext)


def test_split_file_name():
    assert split_file_name("foo") == ["foo"]
    assert split_file_name("a.b.c") == ["a", "b", "c"]
    assert split_file_name(".png") == ["", "png"]


def test_create_dir_and_save_creates_parents(tmp_path):
    path = create_dir_and_save(b"bytes", tmp_path / "a" / "b", "x.png")
    assert path.read_bytes() == b"bytes"


def test_list_entries_sorted_and_serialized(tmp_path):
    for name in ("c.svg", "a.png", "b.jpg"):
        (tmp_path / name).write_bytes(b"")

    files = list_entries(tmp_path)
    assert [f.name for f in files] == ["a.png", "b.jpg", "c.svg"]
    assert dump_file_list(files[:1]) == b'[{"name":"a.png"}]'


def test_list_entries_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        list_entries(tmp_path / "no-existe")


def test_dump_empty_list():
    assert dump_file_list([]) == b"[]"
    assert dump_file_list([FileInfo(name="z")]) == b'[{"name":"z"}]'


def test_remove_entry_file_and_empty_directory(tmp_path):
    (tmp_path / "a.png").write_bytes(b"a")
    (tmp_path / "sub").mkdir()

    remove_entry(tmp_path / "a.png")
    remove_entry(tmp_path / "sub")
    assert list_entries(tmp_path) == []


def test_remove_entry_non_empty_directory(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "x.png").write_bytes(b"x")
    with pytest.raises(OSError):
        remove_entry(tmp_path / "sub")


def test_default_settings_are_fixed():
    """
    Objetivo: La configuración por defecto es fija: ./uploads, ./downloads y 32 MB por parte.
    """
    settings = StorageSettings.defaults()
    assert settings.upload_dir == Path("uploads")
    assert settings.download_dir == Path("downloads")
    assert settings.max_form_memory == 32 * 1024 * 1024
    assert PORT == 8080
