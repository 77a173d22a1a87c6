"""
Issue a certificate with alternative names, then revoke it
"""
import sys

from tinycert import APIConfig, SAN, Session, CertificateStatus


def main(ca_id: int):
    with Session(APIConfig.from_env()) as session:
        certs = session.certificates

        cert_id = certs.create(
            ca_id,
            "www.example.com",
            org_unit="Web",
            org_name="Example",
            country_code="DE",
            alt=[SAN(dns="example.com"), SAN(dns="www.example.com")],
        )
        print(f"Issued certificate {cert_id}")

        summary = certs.inspect(cert_id)
        print(f"  {summary.subject}, valid until {summary.not_after:%Y-%m-%d}")

        for item in certs.list(ca_id, CertificateStatus.GOOD | CertificateStatus.HOLD):
            print(f"  {item.id} {item.name} {item.status}")

        certs.set_status(cert_id, CertificateStatus.REVOKED)
        print("Revoked")


if __name__ == "__main__":
    main(int(sys.argv[1]))
