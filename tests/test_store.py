import pytest

from radiograph_registry.core.errors import DuplicateKeyError, NotFoundError, ValidationError
from radiograph_registry.models.patient import RadiographStatus
from radiograph_registry.utils.validation import validate_patient_create


def _create(store, code: str, name: str = "Ana", radiographs=None) -> dict:
    payload = {"idPaciente": code, "nombre": name}
    if radiographs is not None:
        payload["radiografias"] = radiographs
    return store.create_patient(validate_patient_create(payload))


def test_create_patient_assigns_id_and_timestamps(store):
    document = _create(store, "PAC-001", radiographs=[{"idRadiografia": "R1", "tipo": "torax"}])
    assert document["_id"] is not None
    assert document["createdAt"] == document["updatedAt"]
    radiograph = document["radiografias"][0]
    assert radiograph["estado"] == "pendiente"
    assert radiograph["fechaNotificacion"] is None


def test_create_patient_duplicate_code_keeps_existing(store):
    _create(store, "PAC-001", name="Original")
    with pytest.raises(DuplicateKeyError):
        _create(store, "PAC-001", name="Otro")
    patients = store.list_patients()
    assert len(patients) == 1
    assert patients[0]["nombre"] == "Original"


def test_list_patients_most_recent_first(store):
    _create(store, "A")
    _create(store, "B")
    codes = [patient["idPaciente"] for patient in store.list_patients()]
    assert codes == ["B", "A"]


def test_list_patients_empty(store):
    assert store.list_patients() == []


def test_find_patient_by_id_or_code(store):
    created = _create(store, "PAC-001")
    by_id = store.find_patient(str(created["_id"]))
    by_code = store.find_patient("PAC-001")
    assert by_id == by_code


def test_find_patient_missing(store):
    with pytest.raises(NotFoundError):
        store.find_patient("PAC-404")
    with pytest.raises(NotFoundError):
        store.find_patient("0123456789abcdef01234567")


def test_update_status_ready_sets_notified_at(store):
    created = _create(store, "PAC-001", radiographs=[{"idRadiografia": "R1", "tipo": "torax"}])
    updated = store.update_radiograph_status(str(created["_id"]), "R1", "lista")
    radiograph = updated["radiografias"][0]
    assert radiograph["estado"] == "lista"
    assert radiograph["fechaNotificacion"] is not None
    assert radiograph["fechaNotificacion"] >= created["createdAt"]


def test_update_status_ready_twice_refreshes_notified_at(store):
    created = _create(store, "PAC-001", radiographs=[{"idRadiografia": "R1", "tipo": "torax"}])
    first = store.update_radiograph_status(str(created["_id"]), "R1", RadiographStatus.READY)
    second = store.update_radiograph_status(str(created["_id"]), "R1", RadiographStatus.READY)
    assert (
        second["radiografias"][0]["fechaNotificacion"]
        >= first["radiografias"][0]["fechaNotificacion"]
    )


def test_update_status_keeps_notified_at_after_review(store):
    created = _create(store, "PAC-001", radiographs=[{"idRadiografia": "R1", "tipo": "torax"}])
    ready = store.update_radiograph_status(str(created["_id"]), "R1", "lista")
    reviewed = store.update_radiograph_status(str(created["_id"]), "R1", "revisada")
    assert reviewed["radiografias"][0]["estado"] == "revisada"
    assert (
        reviewed["radiografias"][0]["fechaNotificacion"]
        == ready["radiografias"][0]["fechaNotificacion"]
    )


def test_update_status_only_touches_target_radiograph(store):
    created = _create(
        store,
        "PAC-001",
        radiographs=[
            {"idRadiografia": "R1", "tipo": "torax"},
            {"idRadiografia": "R2", "tipo": "craneo"},
        ],
    )
    updated = store.update_radiograph_status(str(created["_id"]), "R2", "lista")
    by_id = {item["idRadiografia"]: item for item in updated["radiografias"]}
    assert by_id["R1"]["estado"] == "pendiente"
    assert by_id["R1"]["fechaNotificacion"] is None
    assert by_id["R2"]["estado"] == "lista"


def test_update_status_invalid_value_leaves_record(store):
    created = _create(store, "PAC-001", radiographs=[{"idRadiografia": "R1", "tipo": "torax"}])
    with pytest.raises(ValidationError):
        store.update_radiograph_status(str(created["_id"]), "R1", "archivada")
    assert store.find_patient("PAC-001")["radiografias"][0]["estado"] == "pendiente"


def test_update_status_missing_patient_or_radiograph(store):
    created = _create(store, "PAC-001", radiographs=[{"idRadiografia": "R1", "tipo": "torax"}])
    with pytest.raises(NotFoundError):
        store.update_radiograph_status("0123456789abcdef01234567", "R1", "lista")
    with pytest.raises(NotFoundError):
        store.update_radiograph_status(str(created["_id"]), "R9", "lista")
