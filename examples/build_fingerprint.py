"""
Example: Build the TLS and HTTP/2 fingerprint for one request

Run with:
    python examples/build_fingerprint.py --client HelloFirefox_106 https://example.com/
"""

import click

from guise import build_request_fingerprint, encode_preface
from guise.errors import FingerprintError

CHROME_JA3 = (
    "771,4865-4866-4867-49195-49199-49196-49200-52393-52392-49171-49172-156-157-47-53,"
    "0-23-65281-10-11-35-16-5-13-18-51-45-43-27-17513-21,29-23-24,0"
)


@click.command()
@click.argument("url")
@click.option("--client", default="HelloChrome_Auto", show_default=True)
@click.option("--ja3", default=CHROME_JA3, help="JA3 string for the ClientHello.")
@click.option("--akamai", default=None, help="Akamai HTTP/2 fingerprint override.")
@click.option("--http1", is_flag=True, help="Advertise http/1.1 instead of h2.")
@click.option("--header", "-H", multiple=True, help="Header as 'Name: value'.")
def main(url, client, ja3, akamai, http1, header):
    headers = {}
    for raw in header:
        name, _, value = raw.partition(":")
        headers[name.strip()] = value.strip()

    try:
        fp = build_request_fingerprint(
            ja3,
            "1" if http1 else "2",
            client,
            headers,
            url,
            akamai=akamai,
        )
    except FingerprintError as exc:
        raise click.BadParameter(str(exc)) from exc

    click.secho(f"identity: {fp.identity}", fg="green")
    click.secho(f"ja3:      {fp.tls.to_ja3()}", fg="yellow")
    click.secho(f"ja3 md5:  {fp.tls.ja3_digest()}", fg="yellow")
    click.secho(f"akamai:   {fp.http2.to_akamai()}", fg="blue")
    click.secho(f"preface:  {len(encode_preface(fp.http2))} bytes", fg="blue")
    for name, values in fp.headers.items():
        click.echo(f"  {name} {values}")


if __name__ == "__main__":
    main()
