# tezvault

tezvault keeps Tezos signing keys in vaults. It has two kinds of vault:

- **`MemoryVault`** (`tezvault.memory`) holds private keys in process memory.
- **`LedgerVault`** (`tezvault.ledger_vault`) works with keys that stay on a Ledger device running the Tezos or Tezos Baking app. The device is reached over the TCP APDU transport, which is what Ledger emulators provide.

The package also provides these building blocks:

- `tezvault.bip32`: BIP32 derivation paths (`44'/1729'/...`). It parses, formats and serialises them.
- `tezvault.apdu`: APDU command and response framing. `tezvault.ledger` and `tezvault.tcp` provide the transport and exchanger interfaces and the TCP transport.
- `tezvault.tezosapp`: the Tezos app client, `TezosApp`. It can get the version, get public keys, sign, set up and deauthorise baking, and read or set the high water marks.
- `tezvault.keys`: Ed25519 and ECDSA public keys, signatures, public key hashes, and Base58Check helpers (`parse_chain_id`, `format_chain_id`).
- `tezvault.mnemonic`: human-readable four-word device identifiers such as `zesty-koala-usable-kiwi`.

## Installation

```
pip install tezvault
```

To install the test dependencies and run the tests:

```
pip install "tezvault[test]"
pytest
```

## Command line

The `tezvault-ledger` command manages baking on Ledger devices. It takes two options:

- `-t` / `--transport` gives a TCP address. The optional user part of the address names the device model: `blue`, `nanoS`, `nanoSP`, `nanoX` or `nanoFTS`, in any letter case. With no model given, a Nano S is assumed.
- `-d` / `--device` picks a device by its mnemonic ID or by its short hex ID.

```
tezvault-ledger -t tcp://nanos@localhost:9999 list
tezvault-ledger -t tcp://localhost:9999 setup-baking "ed25519/0'/0'" --chain-id NetXdQprcVkpaWU --main-hwm 0 --test-hwm 0
tezvault-ledger -t tcp://localhost:9999 get-high-watermark
tezvault-ledger -t tcp://localhost:9999 get-high-watermarks
tezvault-ledger -t tcp://localhost:9999 set-high-watermark 1000
tezvault-ledger -t tcp://localhost:9999 deauthorize-baking
```

What each subcommand does:

- `list` prints the path, the mnemonic ID, the short ID and the app version of each device.
- `setup-baking` prints the address that was authorised.
- `get-high-watermarks` prints the main and test high water marks and the chain ID.

The `tezvault.tools` module offers the same operations as functions: `setup_baking`, `deauthorize_baking`, `set_high_watermark`, `get_high_watermark` and `get_high_watermarks`.

## Library use

```python
from tezvault.bip32 import parse_bip32
from tezvault.keyid import parse_key_id
from tezvault.ledger_vault import LedgerConfig, new_ledger_vault
from tezvault.mnemonic import new_mnemonic
from tezvault.vault import collect

path = parse_bip32("44'/1729'/0'/0'")
print(path.to_bytes().hex())

key_id = parse_key_id("ed25519/0'/0'")    # placed under the Tezos root 44'/1729'
print(key_id)                             # ed25519/44'/1729'/0'/0'
print(new_mnemonic(b"12345"))             # calculating-meerkat-straight-beetle

vault = new_ledger_vault(LedgerConfig(keys=["ed25519/0'/0'"], transport="tcp://localhost:9999"))
for key in collect(vault.list()):
    print(key.id, key.public_key.hash())
vault.close()
```

How the Ledger vault works:

- It uses a single worker thread for all access to the device.
- It closes the device after it has been idle for `close_after` seconds. The default is 10.
- If a signing attempt fails, it reopens the device and tries once more.
- `LedgerConfig.from_mapping` reads a decoded configuration mapping. In that mapping, `close_after` may be a number of seconds or a duration string such as `1m30s`.

### In-memory keys

`MemoryVault` holds key objects that provide `public_key()` and `sign(message)`, for example `tezvault.keys.Ed25519PrivateKey`.

- `import_key` adds a key.
- `list()` yields a `MemoryKeyReference` for each key held at the time of the call.
- `close()` drops the keys.

### Vault drivers

- `register_vault(name, factory)` adds a driver to the global registry.
- `registry().new(name, config)` builds a vault from that driver.
- An unknown name raises `ValueError`.

Importing `tezvault.ledger_vault` registers the `ledger` driver.

`collect` gathers keys from an iterator. It skips keys whose iterator raises `UnsupportedKeyError`.

## What it does not do

- **No USB HID transport.** A transport of `usb` or an empty transport raises a `ConnectionError`. Devices are reached only through `tcp://` addresses or through a `Transport` object that you supply.
- **No encrypted key files.** The memory vault holds only keys that have already been decoded. It does not read or decrypt key files, and it does not prompt for passphrases.
- **No signing server and no other backends.** There is no HTTP signing service, no policy or watermark layer, and no cloud KMS, HSM or PKCS#11 backend.