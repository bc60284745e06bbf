# CityGrid — Database Models
# Import all models here for SQLAlchemy discovery

from citygrid.models.asset import AssetRow                      # noqa
from citygrid.models.parking_slot import ParkingSlotRow         # noqa
from citygrid.models.waste_container import WasteContainerRow   # noqa
from citygrid.models.power_allocation import PowerAllocationRow # noqa
from citygrid.models.device import DeviceRow                    # noqa
from citygrid.models.counter import CounterRow                  # noqa
