'''
Save solution snapshots to HDF5 files. Each class instance passed is saved
as a group, and its attributes as datasets.
'''

import os
import warnings
import h5py


def h5file(savedir,h5filename, *class_inst):
    '''
    Creates h5filename and saves all the classes specified after the
    first input argument

    @param savedir: target directory
    @param h5filename: file name
    @param *class_inst: a number of classes to save
    '''

    os.makedirs(savedir,exist_ok=True)
    h5filename=os.path.join(savedir,h5filename)

    with h5py.File(h5filename,'w') as hdfile:
        for cc in class_inst:
            add_class_as_grp(cc,hdfile)

    return h5filename


def add_class_as_grp(obj,grpParent):
    '''
    Given a class instance 'obj', the routine adds it as a group to a hdf5 file

    Remark: the previous content of the file is not deleted or modified. If the
    class already exists, an error occurs.
    '''

    # look for a name, otherwise use class name
    if hasattr(obj,'name'):
        grp = grpParent.create_group(obj.name)
    else:
        grp = grpParent.create_group(obj.__class__.__name__)

    for attr in obj.__dict__:
        value=getattr(obj,attr)
        if value is None:
            continue
        # Add Output class as subgroup
        if isinstance(value,Output):
            add_class_as_grp(value,grp)
            continue
        try:
            grp[attr]=value
        except TypeError:
            warnings.warn('Attribute %s of type %s could not be saved!'
                                               %(attr,type(value).__name__))

    return grpParent



class Output:
    '''
    Class to store output
    '''

    def __init__(self,name=None):
        self.name=name

    def drop(self, **kwargs):
        '''Attach random variables to this class'''
        for ww in kwargs:
            setattr(self, ww, kwargs[ww])

        return self
