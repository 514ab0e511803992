"""Build small libvirt domain XML documents for tests."""


def file_disk(path, *, fmt=None, readonly=False, target='vda'):
    driver = f"<driver name='qemu' type='{fmt}'/>" if fmt else ''
    ro = '<readonly/>' if readonly else ''
    return (
        "<disk type='file' device='disk'>"
        f"{driver}<source file='{path}'/><target dev='{target}' bus='virtio'/>{ro}"
        '</disk>'
    )


def block_disk(dev, *, fmt=None, readonly=False, target='sda'):
    driver = f"<driver name='qemu' type='{fmt}'/>" if fmt else ''
    ro = '<readonly/>' if readonly else ''
    return (
        "<disk type='block' device='disk'>"
        f"{driver}<source dev='{dev}'/><target dev='{target}' bus='scsi'/>{ro}"
        '</disk>'
    )


def guestfsd_channel(path, *, mode='bind', name='org.libguestfs.channel.0'):
    return (
        "<channel type='unix'>"
        f"<source mode='{mode}' path='{path}'/>"
        f"<target type='virtio' name='{name}'/>"
        '</channel>'
    )


def domain_xml(*devices):
    return (
        "<domain type='kvm'><name>fake</name><devices>"
        + ''.join(devices)
        + '</devices></domain>'
    )
