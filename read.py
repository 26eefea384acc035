'''
Read HDF5 snapshots written by save.h5file.
'''

import h5py


def h5file(filename,ReadList=None):
    '''
    Read entries of a HDF5 file and attaches them to class.
    Groups are saved as sub-classes, while dataset values are saved as class
    attributes

    If a ReadList=None all groups/attributes are read.
    If ReadList is given, the following format is used:

    ReadList = ['name']

    if name is an attribute, this is read as such.
    if name refers to a group, all entries of the group are read
    if name = 'grp/attr' only the attribute attr of the group grp is read
    '''

    class H: pass
    Hinst=H()

    with h5py.File(filename,'r') as hdfile:
        NamesList=[]                   # dataset names
        hdfile.visit(NamesList.append)

        # find SubList (required in case a class has to be read)
        if ReadList is None:
            SubList=NamesList
        else:
            SubList=[]
            for name in NamesList:
                for readname in ReadList:
                    if readname in name:
                        SubList.append(name)

        for name in SubList:
            if isinstance(hdfile[name],h5py.Group):
                if not hasattr(Hinst,name):
                    setattr(Hinst,name,H())
            elif '/' in name:
                subnames=name.split('/')
                if not hasattr(Hinst,subnames[0]):
                    setattr(Hinst,subnames[0],H())
                subclass=getattr(Hinst,subnames[0])
                setattr(subclass,subnames[1],hdfile[name][()])
            else:
                setattr(Hinst,name,hdfile[name][()])

    return Hinst
