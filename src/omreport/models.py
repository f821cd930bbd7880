"""Typed records for omreport XML output.

Each ``*Output`` model corresponds to one omreport command. Field paths are
relative to the root element of that command's XML document.
"""

from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, PlainValidator

from omreport._internal.xml_decode import xml_field, xml_list_field
from omreport.codes import (
    BusProtocolCode,
    DiskAttribute,
    LayoutCode,
    StateCode,
    StatusCode,
    decode_bus_protocol,
    decode_disk_attributes,
    decode_layout,
    decode_state,
    decode_status,
)

NOT_AVAILABLE = "N/A"


def _not_available_to_none(value):
    if isinstance(value, str) and value.strip().upper() == NOT_AVAILABLE:
        return None
    return value


# "N/A" decodes to None.
Reading = Annotated[Optional[float], BeforeValidator(_not_available_to_none)]

StatusField = Annotated[Optional[StatusCode], BeforeValidator(decode_status)]
StateField = Annotated[Optional[StateCode], BeforeValidator(decode_state)]
LayoutField = Annotated[Optional[LayoutCode], BeforeValidator(decode_layout)]
BusProtocolField = Annotated[Optional[BusProtocolCode], BeforeValidator(decode_bus_protocol)]
DiskAttributesField = Annotated[
    DiskAttribute,
    PlainValidator(decode_disk_attributes),
    PlainSerializer(int, return_type=int),
]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AboutOutput(_Record):
    """``omreport about``"""
    version: Optional[str] = xml_field("About>ProductVersion")


class ChassisOutput(_Record):
    """``omreport chassis``: rolled-up status per subsystem."""
    fans_status: StatusField = xml_field("Parent>fans>computedobjstatus")
    memory_status: StatusField = xml_field("Parent>memory>computedobjstatus")
    power_supplies_status: StatusField = xml_field("Parent>powersupply>computedobjstatus")
    power_management_status: StatusField = xml_field("Parent>powermonitoring>computedobjstatus")
    processors_status: StatusField = xml_field("Parent>processor>computedobjstatus")
    temperatures_status: StatusField = xml_field("Parent>temperatures>computedobjstatus")
    voltages_status: StatusField = xml_field("Parent>voltages>computedobjstatus")
    hardware_log_status: StatusField = xml_field("Parent>esmlog>computedobjstatus")
    batteries_status: StatusField = xml_field("Parent>batteries>computedobjstatus")


class BatteryProbe(_Record):
    id: Optional[int] = xml_field("@index")
    location: Optional[str] = xml_field("ProbeLocation")
    status: StatusField = xml_field("probeStatus")


class FanProbe(_Record):
    id: Optional[int] = xml_field("@index")
    reading: Reading = xml_field("ProbeReading")
    status: StatusField = xml_field("ProbeStatus")
    location: Optional[str] = xml_field("ProbeLocation")
    min_critical_threshold: Reading = xml_field("ProbeThresholds>LCThreshold")
    min_non_critical_threshold: Reading = xml_field("ProbeThresholds>LNCThreshold")


class Processor(_Record):
    id: Optional[int] = xml_field("@index")
    name: Optional[str] = xml_field("DevProcessor>ExtName")
    max_speed: Reading = xml_field("DevProcessor>MaxSpeed")
    current_speed: Reading = xml_field("DevProcessor>CurSpeed")
    manufacturer: Optional[str] = xml_field("DevProcessor>Manufacturer")
    model: Optional[str] = xml_field("DevProcessor>Brand")
    physical_cores: Optional[int] = xml_field("DevProcessor>CoreCount")
    virtual_cores: Optional[int] = xml_field("DevProcessor>ThreadCount")
    status: StatusField = xml_field("@status")


class ProcessorProbe(_Record):
    id: Optional[int] = xml_field("@index")
    location: Optional[str] = xml_field("ProbeLocation")
    internal_error: bool = xml_field("ProcessorStatus>CPUStatusIErr", False)
    therm_trip: bool = xml_field("ProcessorStatus>CPUStatusThermTrip", False)
    config_error: bool = xml_field("ProcessorStatus>CPUStatusConfigErr", False)
    presence_detected: bool = xml_field("ProcessorStatus>CPUStatusPresenceDetected", False)
    disabled: bool = xml_field("ProcessorStatus>CPUStatusDisabled", False)
    term_presence_detected: bool = xml_field("ProcessorStatus>CPUStatusTermPresenceDetected", False)
    throttled: bool = xml_field("ProcessorStatus>CPUStatusThrottled", False)


class TemperatureProbe(_Record):
    id: Optional[int] = xml_field("@index")
    reading: Reading = xml_field("ProbeReading")
    status: StatusField = xml_field("ProbeStatus")
    location: Optional[str] = xml_field("ProbeLocation")


class PowerProbe(_Record):
    """Power consumption probe."""
    id: Optional[int] = xml_field("@index")
    name: Optional[str] = xml_field("ProbeLocation")
    reading: Reading = xml_field("ProbeReading")
    status: StatusField = xml_field("ProbeStatus")
    critical_threshold: Reading = xml_field("ProbeThresholds>UCThreshold")
    warning_threshold: Reading = xml_field("ProbeThresholds>UNCThreshold")


class Probe(_Record):
    """Generic probe with lower and upper thresholds (voltages)."""
    id: Optional[int] = xml_field("@instance")
    name: Optional[str] = xml_field("ProbeLocation")
    min_critical_threshold: Reading = xml_field("probeThresholds>lcThreshold")
    min_non_critical_threshold: Reading = xml_field("probeThresholds>lncThreshold")
    max_critical_threshold: Reading = xml_field("probeThresholds>ucThreshold")
    max_non_critical_threshold: Reading = xml_field("probeThresholds>uncThreshold")
    reading: Reading = xml_field("probeReading")
    status: StatusField = xml_field("objstatus")


class Dimm(_Record):
    """A single memory module."""
    array_no: Optional[int] = xml_field("deviceSet")
    asset_tag: Optional[str] = xml_field("AssetTag")
    errors: Optional[int] = xml_field("errCount")
    multi_bit_errors: Optional[int] = xml_field("mbErrCount")
    name: Optional[str] = xml_field("DeviceLocator")
    part_no: Optional[str] = xml_field("PartNumber")
    single_bit_errors: Optional[int] = xml_field("sbErrCount")


class PowerSupplyState(_Record):
    presence_detected: bool = xml_field("PSPresenceDetected", False)
    failure_detected: bool = xml_field("PSFailureDetected", False)
    predictive_failure: bool = xml_field("PSPredictiveFailure", False)
    ac_lost: bool = xml_field("PSACLost", False)
    ac_lost_or_out_of_range: bool = xml_field("PSACLostorOutofRange", False)
    ac_present_or_out_of_range: bool = xml_field("PSACPresentorOutofRange", False)
    config_error: bool = xml_field("PSConfigError", False)


class PowerSupply(_Record):
    id: Optional[int] = xml_field("@index")
    input_rated_watts: Reading = xml_field("InputRatedWatts")
    firmware_version: Optional[str] = xml_field("FirmWareVersion")
    power_monitoring_capable: bool = xml_field("PMCapable", False)
    output_watts: Reading = xml_field("OutputWatts")
    location: Optional[str] = xml_field("PSLocation")
    state: PowerSupplyState = xml_field("PSState", PowerSupplyState())


class Controller(_Record):
    """RAID controller."""
    id: Optional[int] = xml_field("ControllerNum")
    name: Optional[str] = xml_field("Name")
    status: StatusField = xml_field("ObjStatus")
    state: StateField = xml_field("ObjState")


class Enclosure(_Record):
    id: Optional[int] = xml_field("EnclosureID")
    controller_id: Optional[int] = xml_field("ControllerNum")
    status: StatusField = xml_field("ObjStatus")
    state: StateField = xml_field("ObjState")


class VDisk(_Record):
    """Virtual disk."""
    id: Optional[int] = xml_field("DeviceID")
    bus_protocol: BusProtocolField = xml_field("BusProtocol")
    name: Optional[str] = xml_field("Name")
    device_name: Optional[str] = xml_field("DeviceName")
    layout: LayoutField = xml_field("Layout")
    state: StateField = xml_field("ObjState")
    status: StatusField = xml_field("ObjStatus")
    size: Optional[int] = xml_field("Length")


class PDisk(_Record):
    """Physical disk.

    ``attributes`` is decoded from the binary-digit ``AttributesMask`` once,
    at parse time; ``attributes_mask`` keeps the raw string.
    """
    attributes_mask: Optional[str] = xml_field("AttributesMask")
    attributes: DiskAttributesField = xml_field("AttributesMask", DiskAttribute(0))
    bus_protocol: BusProtocolField = xml_field("BusProtocol")
    id: Optional[int] = xml_field("DeviceID")
    controller_id: Optional[int] = xml_field("ControllerNum")
    enclosure_id: Optional[int] = xml_field("EnclosureID")
    part_no: Optional[str] = xml_field("PartNo")
    product_id: Optional[str] = xml_field("ProductID")
    serial_no: Optional[str] = xml_field("DeviceSerialNumber")
    slot_no: Optional[int] = xml_field("EnclosureIndex")
    status: StatusField = xml_field("ObjStatus")
    state: StateField = xml_field("ObjState")
    vendor: Optional[str] = xml_field("Vendor")

    @property
    def failure_predicted(self) -> bool:
        return DiskAttribute.FAILURE_PREDICTED in self.attributes

    @property
    def global_hot_spare(self) -> bool:
        return DiskAttribute.GLOBAL_HOT_SPARE in self.attributes

    @property
    def dedicated_hot_spare(self) -> bool:
        return DiskAttribute.DEDICATED_HOT_SPARE in self.attributes


class ChassisBatteriesOutput(_Record):
    """``omreport chassis batteries``"""
    probes: List[BatteryProbe] = xml_list_field("BatteryObj")


class ChassisFansOutput(_Record):
    """``omreport chassis fans``"""
    probes: List[FanProbe] = xml_list_field("Chassis>FanProbeList>FanProbe")


class ChassisProcessorsOutput(_Record):
    """``omreport chassis processors``"""
    processors: List[Processor] = xml_list_field("ProcessorList>ProcessorConn")
    probes: List[ProcessorProbe] = xml_list_field("CPUStatusProbeList>CPUStatusProbe")


class ChassisPowerMonitoringOutput(_Record):
    """``omreport chassis pwrmonitoring``"""
    probes: List[PowerProbe] = xml_list_field("CurrentProbeList>CurrentProbe")
    status: StatusField = xml_field("ObjStatus")


class ChassisMemoryOutput(_Record):
    """``omreport chassis memory``; sizes are in KB as reported."""
    total_physical_memory_size: Reading = xml_field("MemoryInfo>TotalPhysMemorySize")
    available_physical_memory_size: Reading = xml_field("MemoryInfo>AvailPhysMemorySize")
    dimms: List[Dimm] = xml_list_field("MemDevObj")
    status: StatusField = xml_field("ObjStatus")


class ChassisPowerSuppliesOutput(_Record):
    """``omreport chassis pwrsupplies``"""
    power_supplies: List[PowerSupply] = xml_list_field("Chassis>PowerSupplyList>PowerSupply")


class ChassisTempsOutput(_Record):
    """``omreport chassis temps``"""
    probes: List[TemperatureProbe] = xml_list_field("Chassis>TemperatureProbeList>TemperatureProbe")


class ChassisVoltsOutput(_Record):
    """``omreport chassis volts``"""
    probes: List[Probe] = xml_list_field("VoltageObj")
    status: StatusField = xml_field("computedobjstatus")


class StorageControllerOutput(_Record):
    """``omreport storage controller``"""
    controllers: List[Controller] = xml_list_field("Controllers>DCStorageObject")


class StorageEnclosureOutput(_Record):
    """``omreport storage enclosure``"""
    enclosures: List[Enclosure] = xml_list_field("Enclosures>DCStorageObject")


class StorageVDiskOutput(_Record):
    """``omreport storage vdisk``"""
    vdisks: List[VDisk] = xml_list_field("VirtualDisks>DCStorageObject")


class StoragePDiskOutput(_Record):
    """``omreport storage pdisk controller=<ID>``"""
    pdisks: List[PDisk] = xml_list_field("ArrayDisks>DCStorageObject")
