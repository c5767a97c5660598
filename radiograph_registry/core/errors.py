class RegistryError(Exception):
    """레지스트리 예외의 기본 클래스"""

    status_code = 500

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ValidationError(RegistryError):
    """필수 필드 누락 또는 허용되지 않은 값 입력 시 발생"""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        super().__init__("VAL_001", message)
        self.field = field


class DuplicateKeyError(RegistryError):
    """idPaciente 중복 시 발생"""

    status_code = 400

    def __init__(self, patient_code: str) -> None:
        super().__init__("STORE_DUP_001", "El ID de paciente ya existe")
        self.patient_code = patient_code


class NotFoundError(RegistryError):
    """환자 또는 방사선 사진이 없을 때 발생"""

    status_code = 404

    def __init__(self, message: str) -> None:
        super().__init__("NOT_FOUND_001", message)


class StoreError(RegistryError):
    """그 밖의 저장소 실패"""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__("STORE_001", message)
