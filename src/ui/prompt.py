from getpass import getpass

from utils.errors import PassphraseEmptyError, PassphraseMismatchError


def read_passphrase(twice: bool = False) -> str:
    passphrase = getpass("Passphrase: ")
    if not passphrase.strip():
        raise PassphraseEmptyError()
    if twice and getpass("Confirm passphrase: ") != passphrase:
        raise PassphraseMismatchError()
    return passphrase


def confirm(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")
